"""Shared type definitions for swap models.

Addresses are kept in their configured form (checksummed or lowercase);
comparisons go through normalize_address().
"""

from typing import Annotated, Any

from pydantic import Field

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def validate_uint256(value: Any) -> int:
    """Validate that a value fits in a uint256.

    Args:
        value: Value to validate (int or decimal string)

    Returns:
        The value as an int

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 cannot be a bool")

    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err

    if not isinstance(value, int):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return value


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid Ethereum address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def is_zero_address(address: str) -> bool:
    """True if the address is 0x000...0 (how the factory reports a missing pool)."""
    return normalize_address(address) == ZERO_ADDRESS


def same_address(a: str, b: str) -> bool:
    """Case-insensitive address comparison."""
    return normalize_address(a) == normalize_address(b)


__all__ = [
    "UINT256_MAX",
    "ZERO_ADDRESS",
    "Address",
    "validate_uint256",
    "normalize_address",
    "is_valid_address",
    "is_zero_address",
    "same_address",
]
