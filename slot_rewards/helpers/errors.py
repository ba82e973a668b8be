"""Error types shared by the chain clients, the engine and the API layer."""

import re


SLOT_PATTERN = re.compile(r"\+?[0-9]+")
"""ASCII decimal digits with an optional leading plus sign"""


class UpstreamError(Exception):
    """An external chain client failed, timed out, or answered in an unexpected shape."""


class ClientError(Exception):
    """The caller asked for something that can never be answered."""


class InvalidSlotError(ClientError):
    """Slot is not a non-negative integer."""

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(f"Invalid slot: {raw!r}")


class SlotInFutureError(ClientError):
    """Slot is beyond the current chain head."""

    def __init__(self, slot: int, head_slot: int) -> None:
        self.slot = slot
        self.head_slot = head_slot
        super().__init__(f"Slot {slot} is beyond head slot {head_slot}")


def parse_slot(raw: str | int) -> int:
    """Parse a slot number supplied by a caller.

    Strings must be plain ASCII decimal; underscores, whitespace and other
    Unicode digits are rejected even though ``int`` would accept them.

    Raises:
        InvalidSlotError: If the value is not a non-negative integer
    """
    if isinstance(raw, bool):
        raise InvalidSlotError(raw)
    if isinstance(raw, int):
        slot = raw
    elif isinstance(raw, str) and SLOT_PATTERN.fullmatch(raw):
        slot = int(raw)
    else:
        raise InvalidSlotError(raw)
    if slot < 0:
        raise InvalidSlotError(raw)
    return slot


__all__ = [
    "ClientError",
    "InvalidSlotError",
    "SlotInFutureError",
    "UpstreamError",
    "parse_slot",
]
