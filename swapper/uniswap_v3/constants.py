"""UniswapV3 constants including fee tiers and contract addresses."""

# V3 Fee tiers in Uniswap units (hundredths of a basis point)
# Fee = units / 1,000,000 (e.g., 3000 = 0.3%)
V3_FEE_LOWEST = 100  # 0.01% - stable pairs
V3_FEE_LOW = 500  # 0.05% - stable pairs
V3_FEE_MEDIUM = 3000  # 0.30% - most pairs
V3_FEE_HIGH = 10000  # 1.00% - exotic pairs

V3_FEE_TIERS = [V3_FEE_LOWEST, V3_FEE_LOW, V3_FEE_MEDIUM, V3_FEE_HIGH]

# Contract addresses (Sepolia)
SEPOLIA_FACTORY_ADDRESS = "0x0227628f3F023bb0B980b67D528571c95c6DaC1c"
SEPOLIA_QUOTER_V2_ADDRESS = "0xEd1f6473345F45b75F8179591dd5bA1888cf2FB3"
SEPOLIA_SWAP_ROUTER_02_ADDRESS = "0x3bFA4769FB09eefC5a80d6E87c3B9C650f7Ae48E"

# Mock stablecoins deployed on Sepolia
MUSDT = "0xd46Ed33de33cA5E01Fe816Ca4dce4252EE95E67F"
MUSDC = "0x0c9B1c83C41dA5368934E77FB316CdBB66163d90"

# Quotes are requested with a deadline this far past the current time
QUOTE_DEADLINE_SECONDS = 60 * 10

SEPOLIA_EXPLORER_URL = "https://sepolia.etherscan.io"

__all__ = [
    "V3_FEE_LOWEST",
    "V3_FEE_LOW",
    "V3_FEE_MEDIUM",
    "V3_FEE_HIGH",
    "V3_FEE_TIERS",
    "SEPOLIA_FACTORY_ADDRESS",
    "SEPOLIA_QUOTER_V2_ADDRESS",
    "SEPOLIA_SWAP_ROUTER_02_ADDRESS",
    "MUSDT",
    "MUSDC",
    "QUOTE_DEADLINE_SECONDS",
    "SEPOLIA_EXPLORER_URL",
]
