"""Calldata encoding for the two transactions a swap run sends."""

from __future__ import annotations

from eth_abi import encode

from swapper.models.swap import SwapParameters
from swapper.models.types import normalize_address, validate_uint256

# approve(address,uint256)
APPROVE_SELECTOR = bytes.fromhex("095ea7b3")

# SwapRouter02: exactInputSingle((address,address,uint24,address,uint256,uint256,uint160))
EXACT_INPUT_SINGLE_SELECTOR = bytes.fromhex("04e45aaf")


def _address_bytes(address: str) -> bytes:
    return bytes.fromhex(normalize_address(address, validate=True)[2:])


def encode_approve(spender: str, amount: int) -> str:
    """Encode ERC20.approve(spender, amount).

    Returns:
        0x-prefixed calldata
    """
    encoded_params = encode(
        ["address", "uint256"],
        [_address_bytes(spender), validate_uint256(amount)],
    )
    return "0x" + (APPROVE_SELECTOR + encoded_params).hex()


def encode_exact_input_single(params: SwapParameters) -> str:
    """Encode SwapRouter02.exactInputSingle call.

    Args:
        params: Swap parameters; amount_out_minimum is encoded as given

    Returns:
        0x-prefixed calldata
    """
    # (address tokenIn, address tokenOut, uint24 fee, address recipient,
    #  uint256 amountIn, uint256 amountOutMinimum, uint160 sqrtPriceLimitX96)
    encoded_params = encode(
        ["(address,address,uint24,address,uint256,uint256,uint160)"],
        [
            (
                _address_bytes(params.token_in),
                _address_bytes(params.token_out),
                params.fee,
                _address_bytes(params.recipient),
                params.amount_in,
                params.amount_out_minimum,
                params.sqrt_price_limit_x96,
            )
        ],
    )
    return "0x" + (EXACT_INPUT_SINGLE_SELECTOR + encoded_params).hex()


__all__ = [
    "APPROVE_SELECTOR",
    "EXACT_INPUT_SINGLE_SELECTOR",
    "encode_approve",
    "encode_exact_input_single",
]
