"""Block reward computation for a slot.

The reward paid to the fee recipient of an execution block is

    transaction fees - burnt base fees + static subsidy

converted to Gwei with any remainder dropped. When the fee recipient is a
known builder, the block is flagged as MEV and the builder's largest transfer
out of its own address is reported as the MEV reward.
"""

import httpx

from slot_rewards.analysis.fees import FeeAggregator
from slot_rewards.analysis.models import RewardOutcome, RewardResult
from slot_rewards.analysis.policy import (
    burnt_fees,
    is_mev_block,
    mev_payment,
    static_subsidy,
)
from slot_rewards.data.beacon.slots import SlotResolver
from slot_rewards.data.blocks.models import Block
from slot_rewards.data.builders.registry import BuilderRegistry
from slot_rewards.helpers.logging import get_logger
from slot_rewards.helpers.parsers import wei_to_gwei
from slot_rewards.helpers.rpc import RPCClient


logger = get_logger(__name__)


class RewardEngine:
    """Computes :class:`RewardResult` values for slots and blocks.

    Callers must reject slots beyond the chain head before calling
    :meth:`reward_for_slot`; the engine does not check.
    """

    def __init__(
        self,
        resolver: SlotResolver,
        rpc: RPCClient,
        fees: FeeAggregator,
        registry: BuilderRegistry,
    ) -> None:
        self.resolver = resolver
        self.rpc = rpc
        self.fees = fees
        self.registry = registry

    async def reward_for_slot(
        self, client: httpx.AsyncClient, slot: int
    ) -> RewardOutcome:
        """Reward of the block proposed at ``slot``.

        Returns:
            Outcome with ``not_found`` set and an empty result for skipped slots

        Raises:
            UpstreamError: If the beacon node or the execution node fails
        """
        resolution = await self.resolver.resolve_block_hash(client, slot)
        if resolution.not_found or resolution.block_hash is None:
            return RewardOutcome(result=RewardResult.empty(), not_found=True)

        block = await self.rpc.get_block_by_hash(client, resolution.block_hash)
        result = await self.reward_for_block(client, block)
        return RewardOutcome(result=result)

    async def reward_for_block_number(
        self, client: httpx.AsyncClient, block_number: int
    ) -> RewardResult:
        """Reward of execution block ``block_number``.

        Raises:
            UpstreamError: If the execution node fails
        """
        block = await self.rpc.get_block_by_number(client, block_number)
        return await self.reward_for_block(client, block)

    async def reward_for_block(
        self, client: httpx.AsyncClient, block: Block
    ) -> RewardResult:
        """Reward of an already fetched block."""
        mev = is_mev_block(block, self.registry)
        burnt = burnt_fees(block)
        subsidy = static_subsidy(block.number)
        fee_total = await self.fees.aggregate_fees(client, block.transactions)

        logger.debug(
            "Block %d: subsidy=%d fees=%d burnt=%d",
            block.number,
            subsidy,
            fee_total.total_wei,
            burnt,
        )

        return RewardResult(
            mev=mev,
            block_reward=wei_to_gwei(fee_total.total_wei - burnt + subsidy),
            mev_reward=wei_to_gwei(mev_payment(block)) if mev else 0,
            failed_receipts=fee_total.failed_lookups,
        )


__all__ = ["RewardEngine"]
