"""Tests for approve/exactInputSingle calldata encoding."""

import pytest
from eth_abi import decode

from swapper.models.swap import SwapParameters
from swapper.uniswap_v3 import (
    APPROVE_SELECTOR,
    EXACT_INPUT_SINGLE_SELECTOR,
    encode_approve,
    encode_exact_input_single,
)
from tests.helpers import MUSDC, MUSDT, ROUTER, SIGNER


def _split(calldata: str) -> tuple[bytes, bytes]:
    raw = bytes.fromhex(calldata[2:])
    return raw[:4], raw[4:]


class TestEncodeApprove:
    def test_selector_and_args(self):
        selector, args = _split(encode_approve(ROUTER, 100_000_000))

        assert selector == APPROVE_SELECTOR
        spender, amount = decode(["address", "uint256"], args)
        assert spender.lower() == ROUTER.lower()
        assert amount == 100_000_000

    def test_length(self):
        # 4-byte selector + 2 words
        assert len(encode_approve(ROUTER, 1)) == 2 + 2 * (4 + 64)

    def test_rejects_bad_spender(self):
        with pytest.raises(ValueError):
            encode_approve("0x1234", 1)

    def test_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            encode_approve(ROUTER, -1)


class TestEncodeExactInputSingle:
    def test_selector_and_struct(self):
        params = SwapParameters(
            token_in=MUSDT,
            token_out=MUSDC,
            fee=100,
            recipient=SIGNER,
            amount_in=100_000_000,
            amount_out_minimum=98_500_000,
        )
        selector, args = _split(encode_exact_input_single(params))

        assert selector == EXACT_INPUT_SINGLE_SELECTOR
        (decoded,) = decode(["(address,address,uint24,address,uint256,uint256,uint160)"], args)
        token_in, token_out, fee, recipient, amount_in, amount_out_min, limit = decoded
        assert token_in.lower() == MUSDT.lower()
        assert token_out.lower() == MUSDC.lower()
        assert fee == 100
        assert recipient.lower() == SIGNER.lower()
        assert amount_in == 100_000_000
        assert amount_out_min == 98_500_000
        assert limit == 0

    def test_static_struct_is_seven_words(self):
        params = SwapParameters(
            token_in=MUSDT,
            token_out=MUSDC,
            fee=3000,
            recipient=SIGNER,
            amount_in=1,
            amount_out_minimum=0,
        )
        assert len(encode_exact_input_single(params)) == 2 + 2 * (4 + 7 * 32)
