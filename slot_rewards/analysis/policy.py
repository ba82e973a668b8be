"""Reward policy: static subsidy, burnt fees and MEV payment detection."""

from typing import TYPE_CHECKING

from slot_rewards.analysis.constants import (
    BYZANTIUM_BLOCK,
    BYZANTIUM_SUBSIDY,
    CONSTANTINOPLE_BLOCK,
    CONSTANTINOPLE_SUBSIDY,
    FRONTIER_SUBSIDY,
    MERGE_BLOCK,
)


if TYPE_CHECKING:
    from slot_rewards.data.blocks.models import Block
    from slot_rewards.data.builders.registry import BuilderRegistry


def static_subsidy(block_number: int) -> int:
    """Protocol block subsidy in wei for ``block_number``.

    Boundary blocks belong to the later era at Byzantium and Constantinople;
    the merge block itself still earns the Constantinople subsidy. Genesis
    and anything below it earn nothing.

    Example:
        >>> static_subsidy(4_369_999) == 5 * 10**18
        True
        >>> static_subsidy(15_537_393)
        0
    """
    if 0 < block_number < BYZANTIUM_BLOCK:
        return FRONTIER_SUBSIDY
    if BYZANTIUM_BLOCK <= block_number < CONSTANTINOPLE_BLOCK:
        return BYZANTIUM_SUBSIDY
    if CONSTANTINOPLE_BLOCK <= block_number <= MERGE_BLOCK:
        return CONSTANTINOPLE_SUBSIDY
    return 0


def burnt_fees(block: "Block") -> int:
    """Base fee destroyed by ``block`` in wei; zero before London."""
    if block.base_fee_per_gas is None:
        return 0
    return block.base_fee_per_gas * block.gas_used


def is_mev_block(block: "Block", registry: "BuilderRegistry") -> bool:
    """Whether the block's fee recipient is a known builder."""
    return registry.is_builder(block.fee_recipient)


def mev_payment(block: "Block") -> int:
    """Value in wei of the builder's payment to the proposer.

    Builders pay the proposer with a transfer sent from their own fee-recipient
    address inside the block they built. Some blocks carry more than one such
    transfer; the largest is taken as the payment, not the sum. Zero when the
    builder sent nothing.
    """
    builder = block.fee_recipient
    payment = 0
    for tx in block.transactions:
        if tx.sender == builder and tx.value > payment:
            payment = tx.value
    return payment


__all__ = ["burnt_fees", "is_mev_block", "mev_payment", "static_subsidy"]
