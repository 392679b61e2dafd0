"""Command-line entry point: swap a fixed amount of the input token.

Usage:
    RPC_URL=... PRIVATE_KEY=... python -m swapper --amount 100

Exit status is 0 when the swap transaction was submitted and 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from decimal import Decimal, InvalidOperation

import structlog
from pydantic import ValidationError

from swapper.config import SwapConfig
from swapper.gateway import Web3ChainGateway
from swapper.orchestrator import SwapOrchestrator, SwapOutcome

logger = structlog.get_logger()

DEFAULT_SWAP_AMOUNT = Decimal(100)


def _amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation as err:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}") from err
    if not amount.is_finite() or amount <= 0:
        raise argparse.ArgumentTypeError(f"amount must be positive: {value!r}")
    return amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Swap tokens through a UniswapV3 SwapRouter02",
    )
    parser.add_argument(
        "--amount",
        type=_amount,
        default=DEFAULT_SWAP_AMOUNT,
        help="Amount of the input token to swap, in whole tokens",
    )
    parser.add_argument(
        "--fee",
        type=int,
        default=None,
        help="Pool fee tier (100, 500, 3000 or 10000); overrides SWAP_FEE_TIER",
    )
    parser.add_argument(
        "--slippage-bps",
        type=int,
        default=None,
        help="Slippage tolerance for amountOutMinimum in basis points (default: 0)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Minimum log level",
    )
    return parser


def configure_logging(level: str) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
    )


def print_summary(config: SwapConfig, outcome: SwapOutcome) -> None:
    """Human-readable result with a block explorer link per transaction."""
    print("-------------------------------")
    if outcome.approval is not None:
        approval_url = config.tx_url(outcome.approval.tx_hash)
        if outcome.approval.confirmed:
            print(f"Approval Transaction Confirmed! {approval_url}")
        else:
            print(f"Approval Transaction Sent: {approval_url}")
    if outcome.swap is not None:
        print(f"Receipt: {config.tx_url(outcome.swap.tx_hash)}")
    if not outcome.succeeded:
        print(f"An error occurred: {outcome.error_detail}")
    print("-------------------------------")


async def run_swap(config: SwapConfig, amount: Decimal) -> SwapOutcome:
    gateway = Web3ChainGateway(config.rpc_url, config.private_key.get_secret_value())
    return await SwapOrchestrator(config, gateway).run(amount)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = SwapConfig.from_env(fee_tier=args.fee, slippage_bps=args.slippage_bps)
    except (ValueError, ValidationError) as e:
        logger.error("invalid_configuration", error=str(e))
        return 1

    logger.info(
        "starting_swap",
        amount=str(args.amount),
        token_in=config.token_in_address,
        token_out=config.token_out_address,
        fee_tier=config.fee_tier,
    )
    try:
        outcome = asyncio.run(run_swap(config, args.amount))
    except ValueError as e:
        logger.error("invalid_amount", amount=str(args.amount), error=str(e))
        return 1
    print_summary(config, outcome)
    return 0 if outcome.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
