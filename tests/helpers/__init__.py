"""Test helpers module for shared test utilities."""

from tests.helpers.constants import (
    FACTORY,
    FIXED_NOW,
    MUSDC,
    MUSDT,
    POOL,
    QUOTE_98_5,
    QUOTER,
    ROUTER,
    SIGNER,
    TEST_PRIVATE_KEY,
    TOKEN_DECIMALS,
    TOKEN_SYMBOLS,
)

__all__ = [
    "FACTORY",
    "QUOTER",
    "ROUTER",
    "MUSDT",
    "MUSDC",
    "SIGNER",
    "POOL",
    "TEST_PRIVATE_KEY",
    "TOKEN_DECIMALS",
    "TOKEN_SYMBOLS",
    "QUOTE_98_5",
    "FIXED_NOW",
]
