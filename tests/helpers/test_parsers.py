"""Tests for parsing helpers."""

import pytest

from slot_rewards.helpers.parsers import (
    parse_hex_int,
    parse_optional_hex_int,
    wei_to_eth,
    wei_to_gwei,
)


class TestParseHexInt:
    def test_parses_hex(self) -> None:
        assert parse_hex_int("0xff") == 255

    def test_none_returns_default(self) -> None:
        assert parse_hex_int(None) == 0
        assert parse_hex_int(None, 7) == 7

    def test_int_passes_through(self) -> None:
        assert parse_hex_int(42) == 42

    def test_invalid_hex_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_hex_int("0xzz")


def test_parse_optional_hex_int_keeps_none() -> None:
    assert parse_optional_hex_int(None) is None
    assert parse_optional_hex_int("0x10") == 16


class TestUnitConversion:
    def test_wei_to_gwei_truncates(self) -> None:
        assert wei_to_gwei(1_999_999_999) == 1
        assert wei_to_gwei(10**9) == 1
        assert wei_to_gwei(0) == 0

    def test_wei_to_eth(self) -> None:
        assert wei_to_eth(10**18) == 1.0
        assert wei_to_eth(None) is None
