"""Parsing utilities for common data transformations."""

from slot_rewards.helpers.constants import WEI_PER_GWEI


def parse_hex_int(hex_value: str | int | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Integers pass through unchanged, so already-decoded values are accepted.

    Args:
        hex_value: Hex-encoded string, integer or None
        default: Default value if hex_value is None

    Returns:
        int: Parsed integer value

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        return default
    if isinstance(hex_value, int):
        return hex_value
    return int(hex_value, 16)


def parse_optional_hex_int(hex_value: str | int | None) -> int | None:
    """Parse a hex quantity that may be absent, keeping ``None`` as ``None``."""
    if hex_value is None:
        return None
    return parse_hex_int(hex_value)


def wei_to_gwei(wei: int) -> int:
    """Convert Wei to Gwei, discarding any remainder.

    Example:
        >>> wei_to_gwei(1_999_999_999)
        1
    """
    return wei // WEI_PER_GWEI


def wei_to_eth(wei: int | None) -> float | None:
    """Convert Wei to ETH (divide by 1e18).

    Example:
        >>> wei_to_eth(1000000000000000000)
        1.0
        >>> wei_to_eth(None)
    """
    return float(wei) / 1e18 if wei is not None else None


__all__ = [
    "parse_hex_int",
    "parse_optional_hex_int",
    "wei_to_eth",
    "wei_to_gwei",
]
