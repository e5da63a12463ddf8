"""Tests for pool event models and their ABI payloads."""

import pytest
from eth_abi import decode
from pydantic import ValidationError

from simpleswap.models.events import EventLog, LiquidityAdded, LiquidityRemoved, Swap
from tests.helpers import ALICE, BOB, TOKEN_A, TOKEN_B


def make_added(**overrides) -> LiquidityAdded:
    fields = {
        "provider": ALICE,
        "token_a": TOKEN_A,
        "token_b": TOKEN_B,
        "amount_a_added": 200,
        "amount_b_added": 50,
        "lp_tokens_minted": 100,
    }
    fields.update(overrides)
    return LiquidityAdded(**fields)


class TestEventSignatures:
    @pytest.mark.parametrize(
        "event_type,name",
        [(LiquidityAdded, "LiquidityAdded"), (LiquidityRemoved, "LiquidityRemoved"), (Swap, "Swap")],
    )
    def test_event_name(self, event_type, name):
        assert event_type.event_name() == name

    def test_abi_types(self):
        assert Swap.abi_types() == ["address", "address", "address", "uint256", "uint256"]
        assert len(LiquidityAdded.abi_types()) == len(LiquidityAdded.abi_fields)
        assert len(LiquidityRemoved.abi_types()) == len(LiquidityRemoved.abi_fields)


class TestEventModels:
    def test_addresses_are_normalized(self):
        event = make_added(provider=ALICE.upper().replace("0X", "0x"))
        assert event.provider == ALICE

    def test_amounts_accept_decimal_strings(self):
        assert make_added(amount_a_added="200").amount_a_added == 200

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            make_added(amount_a_added=-1)

    def test_invalid_address_rejected(self):
        with pytest.raises(ValidationError):
            make_added(provider="0x1234")

    def test_events_are_frozen(self):
        event = make_added()
        with pytest.raises(ValidationError):
            event.lp_tokens_minted = 1

    def test_json_uses_camel_case_and_string_amounts(self):
        data = make_added().model_dump(mode="json", by_alias=True)
        assert data == {
            "provider": ALICE,
            "tokenA": TOKEN_A,
            "tokenB": TOKEN_B,
            "amountAAdded": "200",
            "amountBAdded": "50",
            "lpTokensMinted": "100",
        }


class TestEncodeData:
    def test_liquidity_added_layout(self):
        data = make_added().encode_data()

        assert len(data) == 6 * 32
        assert data[12:32] == bytes.fromhex(ALICE[2:])
        assert int.from_bytes(data[96:128], "big") == 200
        assert int.from_bytes(data[160:192], "big") == 100

    def test_swap_decodes_back(self):
        event = Swap(swapper=BOB, token_in=TOKEN_A, token_out=TOKEN_B, amount_in=10, amount_out=9)

        swapper, token_in, token_out, amount_in, amount_out = decode(Swap.abi_types(), event.encode_data())

        assert (swapper.lower(), token_in.lower(), token_out.lower()) == (BOB, TOKEN_A, TOKEN_B)
        assert (amount_in, amount_out) == (10, 9)


class TestEventLog:
    def test_append_and_iterate(self):
        log = EventLog()
        first = make_added()
        second = Swap(swapper=BOB, token_in=TOKEN_A, token_out=TOKEN_B, amount_in=10, amount_out=9)
        log.append(first)
        log.append(second)

        assert list(log) == [first, second]
        assert len(log) == 2
        assert log.last() is second
        assert log.of_type(Swap) == [second]

    def test_empty(self):
        log = EventLog()
        assert log.last() is None
        assert list(log) == []
