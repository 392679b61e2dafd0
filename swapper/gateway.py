"""Chain access for the swap flow.

ChainGateway is the one seam between the swap flow and the network: token
and pool reads, the quoter call, and sending signed transactions. The
web3-backed implementation talks to a JSON-RPC node; tests substitute a
recording mock.
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

import structlog
from eth_account import Account
from web3 import AsyncWeb3

from swapper.models.swap import (
    QuoteRequest,
    TokenDescriptor,
    TransactionReceipt,
    TransactionRequest,
)
from swapper.uniswap_v3.abi import ERC20_ABI, FACTORY_ABI, POOL_ABI, QUOTER_V2_ABI

logger = structlog.get_logger()

# Seconds between polls while waiting for a receipt or further blocks
DEFAULT_POLL_INTERVAL = 1.0


class ChainGateway(Protocol):
    """Protocol for chain access.

    This allows swapping between the real RPC-based gateway and a mock for testing.
    All reads are eth_calls; send_transaction is the only state-changing call.
    """

    @property
    def signer_address(self) -> str:
        """Address of the account that signs and receives."""
        ...

    async def get_token(self, address: str) -> TokenDescriptor:
        """Read symbol() and decimals() of an ERC20 token."""
        ...

    async def get_pool_address(self, factory: str, token_a: str, token_b: str, fee: int) -> str:
        """UniswapV3Factory.getPool; the zero address means no pool."""
        ...

    async def get_pool_token0(self, pool: str) -> str: ...

    async def get_pool_token1(self, pool: str) -> str: ...

    async def get_pool_fee(self, pool: str) -> int: ...

    async def quote_exact_input_single(self, quoter: str, request: QuoteRequest) -> int:
        """Simulate QuoterV2.quoteExactInputSingle via eth_call.

        Returns:
            amountOut in raw units of the output token
        """
        ...

    async def send_transaction(self, request: TransactionRequest) -> str:
        """Sign and broadcast a transaction.

        Returns:
            The 0x-prefixed transaction hash, as soon as the node accepted it
        """
        ...

    async def wait_for_confirmation(
        self,
        tx_hash: str,
        confirmations: int = 1,
        timeout: float = 120.0,
    ) -> TransactionReceipt:
        """Block until the transaction is mined and has `confirmations` confirmations."""
        ...


class Web3ChainGateway:
    """Gateway backed by an AsyncWeb3 HTTP provider and a local signing key."""

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        w3: AsyncWeb3 | None = None,
    ):
        """Initialize the gateway.

        Args:
            rpc_url: HTTP RPC URL (e.g., "https://ethereum-sepolia-rpc.publicnode.com")
            private_key: Hex private key used to sign transactions
            poll_interval: Seconds between receipt/block polls
            w3: Pre-built AsyncWeb3 instance; rpc_url is ignored when given
        """
        self.w3 = w3 if w3 is not None else AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self.account = Account.from_key(private_key)
        self.poll_interval = poll_interval

    @property
    def signer_address(self) -> str:
        return str(self.account.address)

    def _contract(self, address: str, abi: list[dict[str, Any]]) -> Any:
        return self.w3.eth.contract(address=AsyncWeb3.to_checksum_address(address), abi=abi)

    async def get_token(self, address: str) -> TokenDescriptor:
        token = self._contract(address, ERC20_ABI)
        symbol, decimals = await asyncio.gather(
            token.functions.symbol().call(),
            token.functions.decimals().call(),
        )
        return TokenDescriptor(address=address, symbol=str(symbol), decimals=int(decimals))

    async def get_pool_address(self, factory: str, token_a: str, token_b: str, fee: int) -> str:
        contract = self._contract(factory, FACTORY_ABI)
        pool = await contract.functions.getPool(
            AsyncWeb3.to_checksum_address(token_a),
            AsyncWeb3.to_checksum_address(token_b),
            fee,
        ).call()
        return str(pool)

    async def get_pool_token0(self, pool: str) -> str:
        return str(await self._contract(pool, POOL_ABI).functions.token0().call())

    async def get_pool_token1(self, pool: str) -> str:
        return str(await self._contract(pool, POOL_ABI).functions.token1().call())

    async def get_pool_fee(self, pool: str) -> int:
        return int(await self._contract(pool, POOL_ABI).functions.fee().call())

    async def quote_exact_input_single(self, quoter: str, request: QuoteRequest) -> int:
        # QuoterV2 takes no recipient/deadline; the deadline stays on the request
        # for logging only.
        contract = self._contract(quoter, QUOTER_V2_ABI)
        result = await contract.functions.quoteExactInputSingle(
            (
                AsyncWeb3.to_checksum_address(request.token_in),
                AsyncWeb3.to_checksum_address(request.token_out),
                request.amount_in,
                request.fee,
                request.sqrt_price_limit_x96,
            )
        ).call({"from": AsyncWeb3.to_checksum_address(request.recipient)})

        # Result is (amountOut, sqrtPriceX96After, initializedTicksCrossed, gasEstimate)
        return int(result[0])

    async def _fill_transaction(self, request: TransactionRequest) -> dict[str, Any]:
        """Add nonce, chain id, gas limit and EIP-1559 fees to a call."""
        tx: dict[str, Any] = {
            "from": self.account.address,
            "to": AsyncWeb3.to_checksum_address(request.to),
            "data": request.data,
            "value": request.value,
        }
        nonce, chain_id, latest, priority_fee = await asyncio.gather(
            self.w3.eth.get_transaction_count(self.account.address, "pending"),
            self.w3.eth.chain_id,
            self.w3.eth.get_block("latest"),
            self.w3.eth.max_priority_fee,
        )
        tx["nonce"] = nonce
        tx["chainId"] = chain_id
        tx["gas"] = await self.w3.eth.estimate_gas(tx)  # type: ignore[arg-type]
        tx["maxPriorityFeePerGas"] = priority_fee
        tx["maxFeePerGas"] = 2 * latest["baseFeePerGas"] + priority_fee
        return tx

    async def send_transaction(self, request: TransactionRequest) -> str:
        tx = await self._fill_transaction(request)
        signed = self.account.sign_transaction(tx)
        tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
        hex_hash = AsyncWeb3.to_hex(tx_hash)
        logger.debug("transaction_broadcast", tx_hash=hex_hash, to=request.to, nonce=tx["nonce"])
        return hex_hash

    async def wait_for_confirmation(
        self,
        tx_hash: str,
        confirmations: int = 1,
        timeout: float = 120.0,
    ) -> TransactionReceipt:
        return await asyncio.wait_for(self._wait(tx_hash, confirmations, timeout), timeout=timeout)

    async def _wait(self, tx_hash: str, confirmations: int, timeout: float) -> TransactionReceipt:
        receipt = await self.w3.eth.wait_for_transaction_receipt(
            tx_hash,  # type: ignore[arg-type]
            timeout=timeout,
            poll_latency=self.poll_interval,
        )
        block_number = int(receipt["blockNumber"])

        # The block that includes the transaction is the first confirmation
        while True:
            current = await self.w3.eth.block_number
            if current - block_number + 1 >= confirmations:
                break
            await asyncio.sleep(self.poll_interval)

        return TransactionReceipt(
            tx_hash=tx_hash,
            block_number=block_number,
            status=int(receipt["status"]),
            confirmed=True,
        )


__all__ = ["ChainGateway", "Web3ChainGateway", "DEFAULT_POLL_INTERVAL"]
