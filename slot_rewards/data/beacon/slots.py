"""Map slots to execution block hashes."""

from dataclasses import dataclass

import httpx

from slot_rewards.helpers.beacon import BeaconClient
from slot_rewards.helpers.errors import SlotInFutureError
from slot_rewards.helpers.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class SlotResolution:
    """Outcome of resolving a slot.

    ``not_found`` is set when the slot holds no execution block: the proposer
    missed it, or it predates the merge.
    """

    block_hash: str | None
    not_found: bool = False

    @classmethod
    def skipped(cls) -> "SlotResolution":
        return cls(block_hash=None, not_found=True)


class SlotResolver:
    """Resolves the chain head and slot → block hash via the beacon node."""

    def __init__(self, beacon: BeaconClient) -> None:
        self.beacon = beacon

    async def resolve_head_slot(self, client: httpx.AsyncClient) -> int:
        """Return the current head slot.

        Raises:
            UpstreamError: If the beacon node cannot be queried
        """
        return await self.beacon.get_head_slot(client)

    async def ensure_not_future(self, client: httpx.AsyncClient, slot: int) -> int:
        """Reject ``slot`` if it lies beyond the head.

        Returns:
            The head slot

        Raises:
            SlotInFutureError: If ``slot`` is greater than the head slot
            UpstreamError: If the head cannot be resolved
        """
        head_slot = await self.resolve_head_slot(client)
        if slot > head_slot:
            raise SlotInFutureError(slot, head_slot)
        return head_slot

    async def resolve_block_hash(
        self, client: httpx.AsyncClient, slot: int
    ) -> SlotResolution:
        """Resolve the execution block hash proposed at ``slot``.

        Raises:
            UpstreamError: On transport or decoding failure
        """
        response = await self.beacon.get_block(client, slot)
        if response is None:
            logger.debug("Slot %d was skipped", slot)
            return SlotResolution.skipped()

        block_hash = response.execution_block_hash
        if block_hash is None:
            logger.debug("Slot %d has no execution payload", slot)
            return SlotResolution.skipped()

        return SlotResolution(block_hash=block_hash)


__all__ = ["SlotResolution", "SlotResolver"]
