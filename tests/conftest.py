"""Pytest configuration and fixtures."""

import asyncio

import pytest

from swapper.config import SwapConfig
from swapper.models.swap import (
    QuoteRequest,
    TokenDescriptor,
    TransactionReceipt,
    TransactionRequest,
)
from swapper.models.types import ZERO_ADDRESS, normalize_address
from swapper.orchestrator import SwapOrchestrator
from tests.helpers import (
    FIXED_NOW,
    MUSDC,
    MUSDT,
    POOL,
    QUOTE_98_5,
    SIGNER,
    TOKEN_DECIMALS,
    TOKEN_SYMBOLS,
)

# =============================================================================
# Mock classes for dependency injection
# =============================================================================


class MockChainGateway:
    """In-memory ChainGateway that records every call.

    Usage:
        # A MUSDT/MUSDC pool at the 0.01% tier quoting 98.5 MUSDC
        gateway = MockChainGateway()

        # No pool for the pair
        gateway = MockChainGateway(pool_address=ZERO_ADDRESS)

        # Make one call raise
        gateway = MockChainGateway(failures={"quote_exact_input_single": RuntimeError("revert")})

        # Hold confirmations until the test releases them
        gate = asyncio.Event()
        gateway = MockChainGateway(confirmation_gate=gate)
    """

    def __init__(
        self,
        *,
        signer: str = SIGNER,
        pool_address: str = POOL,
        pool_fee: int = 100,
        amount_out: int = QUOTE_98_5,
        receipt_status: int = 1,
        read_delay: float = 0.0,
        failures: dict[str, Exception] | None = None,
        confirmation_gate: asyncio.Event | None = None,
    ) -> None:
        self.signer = signer
        self.pool_address = pool_address
        self.pool_fee = pool_fee
        self.amount_out = amount_out
        self.receipt_status = receipt_status
        self.read_delay = read_delay
        self.failures = failures or {}
        self.confirmation_gate = confirmation_gate

        # Track calls for assertions
        self.calls: list[tuple] = []
        self.quote_requests: list[QuoteRequest] = []
        self.sent: list[TransactionRequest] = []
        self.waits: list[tuple[str, int]] = []
        self.confirmed: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def signer_address(self) -> str:
        return self.signer

    async def _record(self, method: str, *args: object) -> None:
        self.calls.append((method, *args))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.read_delay)
        finally:
            self.in_flight -= 1
        if method in self.failures:
            raise self.failures[method]

    async def get_token(self, address: str) -> TokenDescriptor:
        await self._record("get_token", address)
        key = normalize_address(address)
        return TokenDescriptor(
            address=address,
            symbol=TOKEN_SYMBOLS[key],
            decimals=TOKEN_DECIMALS[key],
        )

    async def get_pool_address(self, factory: str, token_a: str, token_b: str, fee: int) -> str:
        await self._record("get_pool_address", factory, token_a, token_b, fee)
        return self.pool_address

    async def get_pool_token0(self, pool: str) -> str:
        await self._record("get_pool_token0", pool)
        return MUSDC  # 0x0c9B... sorts before 0xd46E...

    async def get_pool_token1(self, pool: str) -> str:
        await self._record("get_pool_token1", pool)
        return MUSDT

    async def get_pool_fee(self, pool: str) -> int:
        await self._record("get_pool_fee", pool)
        return self.pool_fee

    async def quote_exact_input_single(self, quoter: str, request: QuoteRequest) -> int:
        self.quote_requests.append(request)
        await self._record("quote_exact_input_single", quoter, request)
        return self.amount_out

    async def send_transaction(self, request: TransactionRequest) -> str:
        await self._record("send_transaction", request)
        self.sent.append(request)
        return "0x" + f"{len(self.sent):064x}"

    async def wait_for_confirmation(
        self,
        tx_hash: str,
        confirmations: int = 1,
        timeout: float = 120.0,
    ) -> TransactionReceipt:
        self.waits.append((tx_hash, confirmations))
        await self._record("wait_for_confirmation", tx_hash)
        if self.confirmation_gate is not None:
            await self.confirmation_gate.wait()
        self.confirmed.append(tx_hash)
        return TransactionReceipt(
            tx_hash=tx_hash,
            block_number=1234,
            status=self.receipt_status,
            confirmed=True,
        )

    def method_calls(self, method: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == method]


# =============================================================================
# Pytest fixtures
# =============================================================================


@pytest.fixture
def config() -> SwapConfig:
    """Default config: Sepolia deployment, MUSDT -> MUSDC at the 0.01% tier."""
    return SwapConfig(rpc_url="http://localhost:8545")


@pytest.fixture
def gateway() -> MockChainGateway:
    """A gateway with a MUSDT/MUSDC pool quoting 98.5 MUSDC."""
    return MockChainGateway()


@pytest.fixture
def missing_pool_gateway() -> MockChainGateway:
    """A gateway whose factory knows no pool for any pair."""
    return MockChainGateway(pool_address=ZERO_ADDRESS)


@pytest.fixture
def orchestrator(config: SwapConfig, gateway: MockChainGateway) -> SwapOrchestrator:
    """An orchestrator with a fixed clock and the mock gateway."""
    return SwapOrchestrator(config, gateway, clock=lambda: FIXED_NOW)
