"""Sync-committee membership for a slot."""

import asyncio

import httpx

from slot_rewards.data.beacon.models import ValidatorEntry
from slot_rewards.helpers.beacon import BeaconClient
from slot_rewards.helpers.cache import MemoryCache
from slot_rewards.helpers.errors import UpstreamError
from slot_rewards.helpers.logging import get_logger


logger = get_logger(__name__)

type SyncCommitteeSet = frozenset[str]
type ValidatorRoster = dict[str, ValidatorEntry]


class SyncCommitteeService:
    """Cache-backed lookups of sync committees and validator rosters.

    Callers are expected to reject slots beyond the chain head first, so every
    cached entry describes finalized history.
    """

    def __init__(
        self,
        beacon: BeaconClient,
        committee_cache: MemoryCache[int, SyncCommitteeSet] | None = None,
        roster_cache: MemoryCache[int, ValidatorRoster] | None = None,
    ) -> None:
        self.beacon = beacon
        self.committee_cache = (
            MemoryCache("sync_committee") if committee_cache is None else committee_cache
        )
        self.roster_cache = (
            MemoryCache("validator_roster") if roster_cache is None else roster_cache
        )

    async def get_sync_committee(
        self, client: httpx.AsyncClient, slot: int
    ) -> SyncCommitteeSet:
        """Validator indices on sync-committee duty at ``slot``.

        A state the beacon node does not know yields an empty set, which is
        cached like any other answer.
        """
        cached, found = self.committee_cache.get(slot)
        if found and cached is not None:
            return cached

        response = await self.beacon.get_sync_committee(client, slot)
        members: SyncCommitteeSet = (
            frozenset(response.data.validators) if response else frozenset()
        )
        if response is None:
            logger.info("No sync committee found for slot %d", slot)

        self.committee_cache.set(slot, members)
        return members

    async def get_validator_roster(
        self, client: httpx.AsyncClient, slot: int
    ) -> ValidatorRoster:
        """Validator index → entry mapping for the state at ``slot``.

        Raises:
            UpstreamError: If the roster is unavailable
        """
        cached, found = self.roster_cache.get(slot)
        if found and cached is not None:
            return cached

        response = await self.beacon.get_validators(client, slot)
        if response is None:
            msg = f"validator roster for slot {slot} not found"
            raise UpstreamError(msg)

        roster = {entry.index: entry for entry in response.data}
        self.roster_cache.set(slot, roster)
        return roster

    async def sync_duty_pubkeys(
        self, client: httpx.AsyncClient, slot: int
    ) -> list[str]:
        """Public keys of the sync-committee members at ``slot``, in roster order.

        The committee and the roster are fetched concurrently.
        """
        committee, roster = await asyncio.gather(
            self.get_sync_committee(client, slot),
            self.get_validator_roster(client, slot),
        )
        return [
            entry.pubkey for index, entry in roster.items() if index in committee
        ]


__all__ = ["SyncCommitteeService", "SyncCommitteeSet", "ValidatorRoster"]
