"""Tests for slot parsing and the error types."""

import pytest

from slot_rewards.helpers.errors import InvalidSlotError, SlotInFutureError, parse_slot


class TestParseSlot:
    """Tests for parse_slot."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("0", 0), ("9197117", 9197117), ("+12", 12), ("007", 7), (42, 42)],
    )
    def test_accepts_decimal(self, raw: str | int, expected: int) -> None:
        assert parse_slot(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "-1", "1.5", "1_000", " 5", "5 ", "5\n", "١٢", "0x10", "1e3", -1, True],
    )
    def test_rejects(self, raw: str | int) -> None:
        with pytest.raises(InvalidSlotError) as exc_info:
            parse_slot(raw)

        assert exc_info.value.raw == raw


def test_slot_in_future_message() -> None:
    err = SlotInFutureError(10, 5)

    assert str(err) == "Slot 10 is beyond head slot 5"
