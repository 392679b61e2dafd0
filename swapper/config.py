"""Configuration for a swap run.

All contract addresses, the token pair, the fee tier and the signing
credentials are passed in through SwapConfig, so the swap flow can run
against mock collaborators as easily as against a live network.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator

from swapper.models.types import Address, same_address
from swapper.uniswap_v3.constants import (
    MUSDC,
    MUSDT,
    QUOTE_DEADLINE_SECONDS,
    SEPOLIA_EXPLORER_URL,
    SEPOLIA_FACTORY_ADDRESS,
    SEPOLIA_QUOTER_V2_ADDRESS,
    SEPOLIA_SWAP_ROUTER_02_ADDRESS,
    V3_FEE_LOWEST,
    V3_FEE_TIERS,
)


class TransactionPolicy(BaseModel):
    """How long to wait after sending a transaction.

    Attributes:
        wait_for_confirmation: If True, block until the transaction is mined
            and has `confirmations` confirmations. If False, return as soon
            as the node accepted it.
        confirmations: Number of confirmations to wait for (1 = mined).
        timeout_seconds: Give up waiting after this long.
    """

    model_config = {"frozen": True}

    wait_for_confirmation: bool
    confirmations: int = Field(default=1, ge=1)
    timeout_seconds: float = Field(default=120.0, gt=0)


# Approval blocks until mined; the swap is fire-and-forget.
DEFAULT_APPROVAL_POLICY = TransactionPolicy(wait_for_confirmation=True, confirmations=1)
DEFAULT_SWAP_POLICY = TransactionPolicy(wait_for_confirmation=False)


class SwapConfig(BaseModel):
    """Everything a swap run needs besides the amount.

    Attributes:
        rpc_url: HTTP RPC endpoint
        private_key: Signing key of the account that swaps
        factory_address: UniswapV3Factory
        quoter_address: QuoterV2
        router_address: SwapRouter02 (also the approval spender)
        token_in_address: Token sold
        token_out_address: Token bought
        fee_tier: Pool fee tier; no other tier is tried
        slippage_bps: Tolerance applied to the quote for amountOutMinimum.
            Defaults to 0, meaning amountOutMinimum equals the quote exactly.
        quote_deadline_seconds: Deadline horizon sent with the quote
        approval_policy: Confirmation policy for the approval transaction
        swap_policy: Confirmation policy for the swap transaction
        explorer_url: Block explorer base URL for transaction links
    """

    model_config = {"frozen": True}

    rpc_url: str = ""
    private_key: SecretStr = SecretStr("")
    factory_address: Address = SEPOLIA_FACTORY_ADDRESS
    quoter_address: Address = SEPOLIA_QUOTER_V2_ADDRESS
    router_address: Address = SEPOLIA_SWAP_ROUTER_02_ADDRESS
    token_in_address: Address = MUSDT
    token_out_address: Address = MUSDC
    fee_tier: int = V3_FEE_LOWEST
    slippage_bps: int = Field(default=0, ge=0, le=10_000)
    quote_deadline_seconds: int = Field(default=QUOTE_DEADLINE_SECONDS, gt=0)
    approval_policy: TransactionPolicy = DEFAULT_APPROVAL_POLICY
    swap_policy: TransactionPolicy = DEFAULT_SWAP_POLICY
    explorer_url: str = SEPOLIA_EXPLORER_URL

    @field_validator("fee_tier")
    @classmethod
    def check_fee_tier(cls, value: int) -> int:
        if value not in V3_FEE_TIERS:
            raise ValueError(f"Unsupported fee tier {value}, expected one of {V3_FEE_TIERS}")
        return value

    @field_validator("explorer_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def check_distinct_tokens(self) -> SwapConfig:
        if same_address(self.token_in_address, self.token_out_address):
            raise ValueError("token_in_address and token_out_address must differ")
        return self

    def tx_url(self, tx_hash: str) -> str:
        """Block explorer link for a transaction hash."""
        return f"{self.explorer_url}/tx/{tx_hash}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> SwapConfig:
        """Build a config from environment variables.

        Required:
        - RPC_URL: HTTP RPC endpoint
        - PRIVATE_KEY: Hex private key of the swapping account

        Optional (defaults to the Sepolia deployment and MUSDT -> MUSDC):
        - SWAP_FACTORY_ADDRESS, SWAP_QUOTER_ADDRESS, SWAP_ROUTER_ADDRESS
        - SWAP_TOKEN_IN, SWAP_TOKEN_OUT
        - SWAP_FEE_TIER, SWAP_SLIPPAGE_BPS
        - SWAP_EXPLORER_URL

        Keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ

        rpc_url = env.get("RPC_URL", "")
        private_key = env.get("PRIVATE_KEY", "")
        if not rpc_url:
            raise ValueError("RPC_URL environment variable not set")
        if not private_key:
            raise ValueError("PRIVATE_KEY environment variable not set")

        values: dict[str, object] = {"rpc_url": rpc_url, "private_key": private_key}
        optional = {
            "SWAP_FACTORY_ADDRESS": "factory_address",
            "SWAP_QUOTER_ADDRESS": "quoter_address",
            "SWAP_ROUTER_ADDRESS": "router_address",
            "SWAP_TOKEN_IN": "token_in_address",
            "SWAP_TOKEN_OUT": "token_out_address",
            "SWAP_FEE_TIER": "fee_tier",
            "SWAP_SLIPPAGE_BPS": "slippage_bps",
            "SWAP_EXPLORER_URL": "explorer_url",
        }
        for env_name, field_name in optional.items():
            if env.get(env_name):
                values[field_name] = env[env_name]

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)


__all__ = [
    "TransactionPolicy",
    "DEFAULT_APPROVAL_POLICY",
    "DEFAULT_SWAP_POLICY",
    "SwapConfig",
]
