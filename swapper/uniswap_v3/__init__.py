"""UniswapV3 contract constants, ABI fragments and calldata encoding."""

from .abi import ERC20_ABI, FACTORY_ABI, POOL_ABI, QUOTER_V2_ABI
from .constants import (
    MUSDC,
    MUSDT,
    QUOTE_DEADLINE_SECONDS,
    SEPOLIA_EXPLORER_URL,
    SEPOLIA_FACTORY_ADDRESS,
    SEPOLIA_QUOTER_V2_ADDRESS,
    SEPOLIA_SWAP_ROUTER_02_ADDRESS,
    V3_FEE_HIGH,
    V3_FEE_LOW,
    V3_FEE_LOWEST,
    V3_FEE_MEDIUM,
    V3_FEE_TIERS,
)
from .encoding import (
    APPROVE_SELECTOR,
    EXACT_INPUT_SINGLE_SELECTOR,
    encode_approve,
    encode_exact_input_single,
)

__all__ = [
    # Constants
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "SEPOLIA_FACTORY_ADDRESS",
    "SEPOLIA_QUOTER_V2_ADDRESS",
    "SEPOLIA_SWAP_ROUTER_02_ADDRESS",
    "SEPOLIA_EXPLORER_URL",
    "MUSDT",
    "MUSDC",
    "QUOTE_DEADLINE_SECONDS",
    # ABI
    "ERC20_ABI",
    "FACTORY_ABI",
    "POOL_ABI",
    "QUOTER_V2_ABI",
    # Encoding
    "APPROVE_SELECTOR",
    "EXACT_INPUT_SINGLE_SELECTOR",
    "encode_approve",
    "encode_exact_input_single",
]
