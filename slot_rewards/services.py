"""Wiring of clients, caches and engines from settings."""

from dataclasses import dataclass, field

import httpx

from slot_rewards.analysis.fees import FeeAggregator
from slot_rewards.analysis.rewards import RewardEngine
from slot_rewards.data.beacon.committee import (
    SyncCommitteeService,
    SyncCommitteeSet,
    ValidatorRoster,
)
from slot_rewards.data.beacon.slots import SlotResolver
from slot_rewards.data.blocks.models import Receipt
from slot_rewards.data.builders.registry import BuilderRegistry
from slot_rewards.helpers.beacon import BeaconClient
from slot_rewards.helpers.cache import MemoryCache
from slot_rewards.helpers.config import Settings
from slot_rewards.helpers.http import create_http_client
from slot_rewards.helpers.logging import get_logger, set_log_level
from slot_rewards.helpers.rpc import RPCClient


logger = get_logger(__name__)


@dataclass
class Caches:
    """The three process-lifetime caches."""

    receipts: MemoryCache[str, Receipt] = field(
        default_factory=lambda: MemoryCache("receipts")
    )
    sync_committees: MemoryCache[int, SyncCommitteeSet] = field(
        default_factory=lambda: MemoryCache("sync_committee")
    )
    validator_rosters: MemoryCache[int, ValidatorRoster] = field(
        default_factory=lambda: MemoryCache("validator_roster")
    )


@dataclass
class Services:
    """Everything a request needs, built once at startup."""

    settings: Settings
    http_client: httpx.AsyncClient
    resolver: SlotResolver
    rewards: RewardEngine
    committees: SyncCommitteeService
    caches: Caches

    async def aclose(self) -> None:
        await self.http_client.aclose()


def build_services(
    settings: Settings,
    *,
    registry: BuilderRegistry | None = None,
    caches: Caches | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> Services:
    """Assemble the service graph.

    Raises:
        BuilderRegistryError: If the builder registry cannot be loaded
    """
    set_log_level(settings.log_level)

    if registry is None:
        registry = BuilderRegistry.from_file(settings.builders_file)
    caches = Caches() if caches is None else caches
    if http_client is None:
        http_client = create_http_client(timeout=settings.beacon_timeout)

    beacon = BeaconClient(settings.beacon_endpoint, timeout=settings.beacon_timeout)
    rpc = RPCClient(settings.eth_rpc_url, timeout=settings.rpc_timeout)
    resolver = SlotResolver(beacon)
    fees = FeeAggregator(
        rpc, receipt_cache=caches.receipts, batch_size=settings.receipt_batch_size
    )

    logger.info(
        "Services ready (beacon=%s, receipt batch size=%d)",
        settings.beacon_endpoint,
        settings.receipt_batch_size,
    )

    return Services(
        settings=settings,
        http_client=http_client,
        resolver=resolver,
        rewards=RewardEngine(resolver, rpc, fees, registry),
        committees=SyncCommitteeService(
            beacon,
            committee_cache=caches.sync_committees,
            roster_cache=caches.validator_rosters,
        ),
        caches=caches,
    )


__all__ = ["Caches", "Services", "build_services"]
