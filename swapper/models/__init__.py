"""Data structures for the swap flow."""

from swapper.models.swap import (
    PoolReference,
    QuoteRequest,
    QuoteResult,
    SwapParameters,
    TokenDescriptor,
    TransactionReceipt,
    TransactionRequest,
)
from swapper.models.types import ZERO_ADDRESS, Address, normalize_address

__all__ = [
    # Types
    "Address",
    "ZERO_ADDRESS",
    "normalize_address",
    # Swap flow
    "TokenDescriptor",
    "PoolReference",
    "QuoteRequest",
    "QuoteResult",
    "SwapParameters",
    "TransactionRequest",
    "TransactionReceipt",
]
