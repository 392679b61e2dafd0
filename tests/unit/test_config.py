"""Tests for SwapConfig and TransactionPolicy."""

import pytest
from pydantic import ValidationError

from swapper.config import (
    DEFAULT_APPROVAL_POLICY,
    DEFAULT_SWAP_POLICY,
    SwapConfig,
    TransactionPolicy,
)
from tests.helpers import FACTORY, MUSDC, MUSDT, QUOTER, ROUTER, TEST_PRIVATE_KEY


class TestDefaults:
    def test_sepolia_defaults(self):
        config = SwapConfig()

        assert config.factory_address == FACTORY
        assert config.quoter_address == QUOTER
        assert config.router_address == ROUTER
        assert config.token_in_address == MUSDT
        assert config.token_out_address == MUSDC
        assert config.fee_tier == 100
        assert config.quote_deadline_seconds == 600

    def test_no_slippage_by_default(self):
        assert SwapConfig().slippage_bps == 0

    def test_confirmation_policies(self):
        """Approval waits for one confirmation; the swap does not wait."""
        config = SwapConfig()

        assert config.approval_policy == DEFAULT_APPROVAL_POLICY
        assert config.approval_policy.wait_for_confirmation
        assert config.approval_policy.confirmations == 1
        assert config.swap_policy == DEFAULT_SWAP_POLICY
        assert not config.swap_policy.wait_for_confirmation

    def test_frozen(self):
        config = SwapConfig()
        with pytest.raises(ValidationError):
            config.fee_tier = 500  # type: ignore[misc]


class TestValidation:
    @pytest.mark.parametrize("fee", [100, 500, 3000, 10000])
    def test_known_fee_tiers(self, fee):
        assert SwapConfig(fee_tier=fee).fee_tier == fee

    @pytest.mark.parametrize("fee", [0, 1, 300, 100_000])
    def test_unknown_fee_tier(self, fee):
        with pytest.raises(ValidationError, match="Unsupported fee tier"):
            SwapConfig(fee_tier=fee)

    def test_invalid_address(self):
        with pytest.raises(ValidationError):
            SwapConfig(router_address="0x1234")

    def test_same_token_twice(self):
        with pytest.raises(ValidationError, match="must differ"):
            SwapConfig(token_in_address=MUSDT, token_out_address=MUSDT.lower())

    @pytest.mark.parametrize("bps", [-1, 10_001])
    def test_slippage_range(self, bps):
        with pytest.raises(ValidationError):
            SwapConfig(slippage_bps=bps)

    def test_policy_needs_at_least_one_confirmation(self):
        with pytest.raises(ValidationError):
            TransactionPolicy(wait_for_confirmation=True, confirmations=0)

    def test_private_key_is_hidden(self):
        config = SwapConfig(private_key=TEST_PRIVATE_KEY)
        assert TEST_PRIVATE_KEY not in repr(config)
        assert config.private_key.get_secret_value() == TEST_PRIVATE_KEY


class TestTxUrl:
    def test_default_explorer(self):
        assert SwapConfig().tx_url("0xabc") == "https://sepolia.etherscan.io/tx/0xabc"

    def test_trailing_slash_stripped(self):
        config = SwapConfig(explorer_url="https://etherscan.io/")
        assert config.tx_url("0xabc") == "https://etherscan.io/tx/0xabc"


class TestFromEnv:
    def test_required_values(self):
        env = {"RPC_URL": "http://node:8545", "PRIVATE_KEY": TEST_PRIVATE_KEY}
        config = SwapConfig.from_env(env)

        assert config.rpc_url == "http://node:8545"
        assert config.private_key.get_secret_value() == TEST_PRIVATE_KEY
        assert config.token_in_address == MUSDT

    def test_missing_rpc_url(self):
        with pytest.raises(ValueError, match="RPC_URL"):
            SwapConfig.from_env({"PRIVATE_KEY": TEST_PRIVATE_KEY})

    def test_missing_private_key(self):
        with pytest.raises(ValueError, match="PRIVATE_KEY"):
            SwapConfig.from_env({"RPC_URL": "http://node:8545"})

    def test_optional_overrides(self):
        env = {
            "RPC_URL": "http://node:8545",
            "PRIVATE_KEY": TEST_PRIVATE_KEY,
            "SWAP_TOKEN_IN": MUSDC,
            "SWAP_TOKEN_OUT": MUSDT,
            "SWAP_FEE_TIER": "500",
            "SWAP_SLIPPAGE_BPS": "50",
        }
        config = SwapConfig.from_env(env)

        assert config.token_in_address == MUSDC
        assert config.token_out_address == MUSDT
        assert config.fee_tier == 500
        assert config.slippage_bps == 50

    def test_keyword_overrides_win(self):
        env = {
            "RPC_URL": "http://node:8545",
            "PRIVATE_KEY": TEST_PRIVATE_KEY,
            "SWAP_FEE_TIER": "500",
        }
        config = SwapConfig.from_env(env, fee_tier=3000, slippage_bps=None)

        assert config.fee_tier == 3000
        assert config.slippage_bps == 0

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("RPC_URL", "http://env-node:8545")
        monkeypatch.setenv("PRIVATE_KEY", TEST_PRIVATE_KEY)
        assert SwapConfig.from_env().rpc_url == "http://env-node:8545"
