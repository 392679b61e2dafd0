"""Single-swap orchestration.

A run moves through a fixed sequence of states:

    Idle -> PoolResolved -> Quoted -> ParamsBuilt -> Approved -> Submitted

Each step returns a StepResult; the first failing step moves the run to
Failed and nothing after it is attempted. Nothing is rolled back: an
approval that was mined before a later failure stays in effect on-chain.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum

import structlog

from swapper.config import SwapConfig, TransactionPolicy
from swapper.errors import StepResult, SwapErrorKind, error_for_kind
from swapper.gateway import ChainGateway
from swapper.models.swap import (
    PoolReference,
    QuoteRequest,
    QuoteResult,
    SwapParameters,
    TokenDescriptor,
    TransactionReceipt,
    TransactionRequest,
)
from swapper.models.types import is_zero_address
from swapper.uniswap_v3.encoding import encode_approve, encode_exact_input_single
from swapper.units import apply_slippage, format_units, parse_units

logger = structlog.get_logger()


def _check_amount(amount: Decimal | int | str) -> None:
    """Raise ValueError unless amount is a finite, positive number."""
    try:
        value = Decimal(amount)
    except InvalidOperation as err:
        raise ValueError(f"Invalid swap amount: {amount!r}") from err
    if not value.is_finite():
        raise ValueError(f"Invalid swap amount: {amount!r}")
    if value <= 0:
        raise ValueError(f"Swap amount must be positive, got {amount}")


class SwapState(Enum):
    """States of a swap run."""

    IDLE = "idle"
    POOL_RESOLVED = "pool_resolved"
    QUOTED = "quoted"
    PARAMS_BUILT = "params_built"
    APPROVED = "approved"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass
class SwapOutcome:
    """Everything a run produced, up to the point where it stopped.

    Attributes:
        state: SUBMITTED on success, FAILED otherwise.
        failed_at: The last state reached before failing (None on success).
        error: Kind of failure, if any.
    """

    state: SwapState = SwapState.IDLE
    failed_at: SwapState | None = None
    token_in: TokenDescriptor | None = None
    token_out: TokenDescriptor | None = None
    amount_in: int | None = None
    pool: PoolReference | None = None
    quote: QuoteResult | None = None
    parameters: SwapParameters | None = None
    approval: TransactionReceipt | None = None
    swap: TransactionReceipt | None = None
    error: SwapErrorKind | None = None
    error_detail: str | None = None
    cause: BaseException | None = field(default=None, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.state is SwapState.SUBMITTED

    def raise_for_error(self) -> None:
        """Raise the SwapError matching the failure, if the run failed."""
        if self.error is not None:
            raise error_for_kind(self.error, self.error_detail or self.error.value) from self.cause


class SwapOrchestrator:
    """Runs one exact-input swap through a UniswapV3 SwapRouter02.

    Usage:
        gateway = Web3ChainGateway(config.rpc_url, config.private_key.get_secret_value())
        outcome = await SwapOrchestrator(config, gateway).run(100)
    """

    def __init__(
        self,
        config: SwapConfig,
        gateway: ChainGateway,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config
        self.gateway = gateway
        self._clock = clock

    async def load_tokens(self) -> StepResult[tuple[TokenDescriptor, TokenDescriptor]]:
        """Read symbol and decimals of the configured input and output tokens."""
        try:
            token_in, token_out = await asyncio.gather(
                self.gateway.get_token(self.config.token_in_address),
                self.gateway.get_token(self.config.token_out_address),
            )
        except Exception as e:
            return StepResult.fail(
                SwapErrorKind.TOKEN_LOOKUP_FAILED, f"Failed to read token metadata: {e}", e
            )
        return StepResult.ok((token_in, token_out))

    async def resolve_pool(
        self, token_in: str, token_out: str, fee_tier: int
    ) -> StepResult[PoolReference]:
        """Find the pool for a pair at exactly one fee tier.

        The factory answers with the zero address when no pool exists; no
        other fee tier is tried.
        """
        try:
            pool_address = await self.gateway.get_pool_address(
                self.config.factory_address, token_in, token_out, fee_tier
            )
        except Exception as e:
            return StepResult.fail(SwapErrorKind.POOL_READ_FAILED, f"getPool failed: {e}", e)

        if is_zero_address(pool_address):
            return StepResult.fail(
                SwapErrorKind.POOL_NOT_FOUND,
                f"Failed to get pool address: no pool for {token_in}/{token_out} at fee {fee_tier}",
            )

        try:
            token0, token1, fee = await asyncio.gather(
                self.gateway.get_pool_token0(pool_address),
                self.gateway.get_pool_token1(pool_address),
                self.gateway.get_pool_fee(pool_address),
            )
        except Exception as e:
            return StepResult.fail(
                SwapErrorKind.POOL_READ_FAILED, f"Failed to read pool {pool_address}: {e}", e
            )

        pool = PoolReference(pool_address=pool_address, token0=token0, token1=token1, fee=fee)
        logger.info(
            "pool_resolved",
            pool=pool.pool_address,
            token0=pool.token0,
            token1=pool.token1,
            fee=pool.fee,
            fee_percent=pool.fee_percent,
        )
        return StepResult.ok(pool)

    async def get_quote(
        self,
        fee: int,
        recipient: str,
        amount_in: int,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
    ) -> StepResult[QuoteResult]:
        """Ask the quoter what amount_in of token_in buys, without a price limit.

        Goes through eth_call only, so chain state is untouched. One attempt.
        """
        request = QuoteRequest(
            token_in=token_in.address,
            token_out=token_out.address,
            fee=fee,
            recipient=recipient,
            amount_in=amount_in,
            deadline=int(self._clock()) + self.config.quote_deadline_seconds,
        )
        logger.info(
            "fetching_quote",
            token_in=token_in.symbol,
            token_out=token_out.symbol,
            amount_in=str(format_units(amount_in, token_in.decimals)),
        )

        try:
            amount_out = await self.gateway.quote_exact_input_single(
                self.config.quoter_address, request
            )
        except Exception as e:
            return StepResult.fail(SwapErrorKind.QUOTE_FAILED, f"Quote failed: {e}", e)

        quote = QuoteResult(
            amount_out=amount_out,
            amount_out_readable=format_units(amount_out, token_out.decimals),
            deadline=request.deadline,
        )
        logger.info(
            "quote_received",
            amount_in=str(format_units(amount_in, token_in.decimals)),
            token_in=token_in.symbol,
            amount_out=str(quote.amount_out_readable),
            token_out=token_out.symbol,
            deadline=quote.deadline,
        )
        return StepResult.ok(quote)

    async def build_swap_parameters(
        self,
        pool: PoolReference,
        recipient: str,
        amount_in: int,
        quote: QuoteResult,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
    ) -> StepResult[SwapParameters]:
        """Assemble the exactInputSingle struct.

        The fee is read from the pool again rather than taken from `pool`.
        amountOutMinimum is the quote minus config.slippage_bps; with the
        default of 0 it equals the quote and gives no protection against
        price movement before the swap is mined.
        """
        try:
            fee = await self.gateway.get_pool_fee(pool.pool_address)
        except Exception as e:
            return StepResult.fail(
                SwapErrorKind.POOL_READ_FAILED, f"Failed to read pool fee: {e}", e
            )

        slippage_bps = self.config.slippage_bps
        if slippage_bps == 0:
            logger.warning(
                "no_slippage_protection",
                amount_out_minimum=quote.amount_out,
                message="amountOutMinimum equals the quote exactly",
            )

        params = SwapParameters(
            token_in=token_in.address,
            token_out=token_out.address,
            fee=fee,
            recipient=recipient,
            amount_in=amount_in,
            amount_out_minimum=apply_slippage(quote.amount_out, slippage_bps),
        )
        logger.debug("swap_parameters_built", **asdict(params))
        return StepResult.ok(params)

    async def approve_allowance(
        self,
        token_address: str,
        amount: int,
        spender: str | None = None,
    ) -> StepResult[TransactionReceipt]:
        """Approve the router (or `spender`) to move `amount` of the token.

        Waits according to config.approval_policy (one confirmation by default).
        """
        request = TransactionRequest(
            to=token_address,
            data=encode_approve(spender or self.config.router_address, amount),
        )
        logger.info("sending_approval", token=token_address, amount=amount)
        return await self._submit(
            request, self.config.approval_policy, SwapErrorKind.APPROVAL_FAILED, "approval"
        )

    async def execute_swap(self, parameters: SwapParameters) -> StepResult[TransactionReceipt]:
        """Send exactInputSingle to the router.

        Follows config.swap_policy, which by default returns right after
        submission without waiting for the transaction to be mined.
        """
        request = TransactionRequest(
            to=self.config.router_address,
            data=encode_exact_input_single(parameters),
        )
        return await self._submit(
            request, self.config.swap_policy, SwapErrorKind.SWAP_SUBMISSION_FAILED, "swap"
        )

    async def _submit(
        self,
        request: TransactionRequest,
        policy: TransactionPolicy,
        error_kind: SwapErrorKind,
        label: str,
    ) -> StepResult[TransactionReceipt]:
        try:
            tx_hash = await self.gateway.send_transaction(request)
        except Exception as e:
            return StepResult.fail(error_kind, f"{label} transaction failed to submit: {e}", e)

        logger.info(f"{label}_sent", tx_hash=tx_hash, url=self.config.tx_url(tx_hash))
        if not policy.wait_for_confirmation:
            return StepResult.ok(TransactionReceipt.pending(tx_hash))

        try:
            receipt = await self.gateway.wait_for_confirmation(
                tx_hash, policy.confirmations, policy.timeout_seconds
            )
        except Exception as e:
            return StepResult.fail(
                error_kind, f"{label} transaction {tx_hash} not confirmed: {e}", e
            )

        if not receipt.succeeded:
            return StepResult.fail(error_kind, f"{label} transaction {tx_hash} reverted")

        logger.info(
            f"{label}_confirmed",
            tx_hash=tx_hash,
            block_number=receipt.block_number,
            url=self.config.tx_url(tx_hash),
        )
        return StepResult.ok(receipt)

    async def run(self, amount: Decimal | int | str) -> SwapOutcome:
        """Swap `amount` whole input tokens for the output token.

        Args:
            amount: Human-readable amount of the input token (e.g., 100)

        Returns:
            SwapOutcome; its state is SUBMITTED on success and FAILED otherwise

        Raises:
            ValueError: If amount is not positive or has too many decimals
        """
        _check_amount(amount)

        outcome = SwapOutcome()

        tokens = await self.load_tokens()
        if tokens.is_error:
            return self._fail(outcome, tokens)
        outcome.token_in, outcome.token_out = tokens.unwrap()
        token_in, token_out = outcome.token_in, outcome.token_out
        amount_in = parse_units(amount, token_in.decimals)
        outcome.amount_in = amount_in

        pool = await self.resolve_pool(token_in.address, token_out.address, self.config.fee_tier)
        if pool.is_error:
            return self._fail(outcome, pool)
        outcome.pool = pool.unwrap()
        outcome.state = SwapState.POOL_RESOLVED

        recipient = self.gateway.signer_address
        quote = await self.get_quote(outcome.pool.fee, recipient, amount_in, token_in, token_out)
        if quote.is_error:
            return self._fail(outcome, quote)
        outcome.quote = quote.unwrap()
        outcome.state = SwapState.QUOTED

        params = await self.build_swap_parameters(
            outcome.pool, recipient, amount_in, outcome.quote, token_in, token_out
        )
        if params.is_error:
            return self._fail(outcome, params)
        outcome.parameters = params.unwrap()
        outcome.state = SwapState.PARAMS_BUILT

        approval = await self.approve_allowance(token_in.address, amount_in)
        if approval.is_error:
            return self._fail(outcome, approval)
        outcome.approval = approval.unwrap()
        outcome.state = SwapState.APPROVED

        swap = await self.execute_swap(outcome.parameters)
        if swap.is_error:
            return self._fail(outcome, swap)
        outcome.swap = swap.unwrap()
        outcome.state = SwapState.SUBMITTED

        logger.info(
            "swap_submitted",
            tx_hash=outcome.swap.tx_hash,
            url=self.config.tx_url(outcome.swap.tx_hash),
        )
        return outcome

    def _fail(self, outcome: SwapOutcome, result: StepResult) -> SwapOutcome:
        outcome.failed_at = outcome.state
        outcome.state = SwapState.FAILED
        outcome.error = result.error
        outcome.error_detail = result.error_detail
        outcome.cause = result.cause
        logger.error(
            "swap_failed",
            failed_at=outcome.failed_at.value,
            error=result.error.value if result.error else None,
            detail=result.error_detail,
        )
        return outcome


__all__ = ["SwapState", "SwapOutcome", "SwapOrchestrator"]
