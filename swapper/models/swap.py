"""Request-scoped value types for a single swap run.

Every structure here is built once by one step of the swap flow, consumed by
the next step, and discarded. None of them is mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from swapper.models.types import is_zero_address


@dataclass(frozen=True)
class TokenDescriptor:
    """An ERC20 token as read from its contract."""

    address: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class PoolReference:
    """A UniswapV3 pool resolved from the factory.

    The factory reports a missing pool as the zero address, so a
    PoolReference can never hold it.
    """

    pool_address: str
    token0: str
    token1: str
    fee: int  # Fee in Uniswap units (e.g., 3000 for 0.3%)

    def __post_init__(self) -> None:
        if is_zero_address(self.pool_address):
            raise ValueError("PoolReference cannot point at the zero address")

    @property
    def fee_percent(self) -> float:
        """Fee as percentage (e.g., 0.3 for 0.3%)."""
        return self.fee / 10000


@dataclass(frozen=True)
class QuoteRequest:
    """Arguments of a QuoterV2.quoteExactInputSingle call."""

    token_in: str
    token_out: str
    fee: int
    recipient: str
    amount_in: int
    deadline: int  # Unix timestamp
    sqrt_price_limit_x96: int = 0  # 0 = no price limit


@dataclass(frozen=True)
class QuoteResult:
    """Output of the quoter for one exact-input swap."""

    amount_out: int  # Raw units of the output token
    amount_out_readable: Decimal  # amount_out scaled by the output token decimals
    deadline: int


@dataclass(frozen=True)
class SwapParameters:
    """The ExactInputSingleParams struct passed to SwapRouter02."""

    token_in: str
    token_out: str
    fee: int
    recipient: str
    amount_in: int
    amount_out_minimum: int
    sqrt_price_limit_x96: int = 0


@dataclass(frozen=True)
class TransactionRequest:
    """An unsigned contract call; nonce, gas and chain id are filled at send time."""

    to: str
    data: str  # 0x-prefixed calldata
    value: int = 0


@dataclass(frozen=True)
class TransactionReceipt:
    """What the network told us about a submitted transaction.

    For transactions that were only submitted (not awaited), block_number and
    status are None and confirmed is False.
    """

    tx_hash: str
    block_number: int | None = None
    status: int | None = None  # 1 = success, 0 = reverted
    confirmed: bool = False

    @classmethod
    def pending(cls, tx_hash: str) -> TransactionReceipt:
        """A receipt for a transaction that has been broadcast but not mined."""
        return cls(tx_hash=tx_hash)

    @property
    def succeeded(self) -> bool:
        return self.confirmed and self.status == 1


__all__ = [
    "TokenDescriptor",
    "PoolReference",
    "QuoteRequest",
    "QuoteResult",
    "SwapParameters",
    "TransactionRequest",
    "TransactionReceipt",
]
