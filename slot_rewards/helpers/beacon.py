"""Consensus-layer (beacon node) REST client."""

from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from slot_rewards.data.beacon.models import (
    BeaconBlockResponse,
    ErrorBody,
    HeadHeaderResponse,
    SyncCommitteeResponse,
    ValidatorsResponse,
)
from slot_rewards.helpers.constants import DEFAULT_BEACON_ENDPOINT, DEFAULT_TIMEOUT
from slot_rewards.helpers.errors import UpstreamError
from slot_rewards.helpers.http import fetch_json_with_status


NOT_FOUND = 404


def _embedded_not_found(body: Any) -> bool:
    if not isinstance(body, dict) or "code" not in body:
        return False
    try:
        return ErrorBody.model_validate(body).code == NOT_FOUND
    except ValidationError:
        return False


class BeaconClient:
    """Typed client for the beacon node endpoints the service consumes.

    Lookups that may legitimately miss (skipped slots, states without a sync
    committee) return ``None`` instead of raising.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BEACON_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize beacon client.

        Args:
            base_url: Beacon node REST base URL
            timeout: Request timeout in seconds

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            msg = "Beacon endpoint cannot be empty"
            raise ValueError(msg)

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _get[M: BaseModel](
        self, client: httpx.AsyncClient, path: str, model: type[M]
    ) -> M | None:
        url = f"{self.base_url}{path}"
        status, body = await fetch_json_with_status(client, url, timeout=self.timeout)

        if _embedded_not_found(body):
            return None

        if status >= 400:
            msg = f"{url} returned HTTP {status}"
            raise UpstreamError(msg)

        try:
            return model.model_validate(body)
        except ValidationError as e:
            msg = f"unexpected response shape from {url}: {e.error_count()} errors"
            raise UpstreamError(msg) from e

    async def get_head_slot(self, client: httpx.AsyncClient) -> int:
        """Get the slot of the canonical chain head.

        Raises:
            UpstreamError: If the request fails or the head cannot be decoded
        """
        response = await self._get(
            client, "/eth/v1/beacon/headers/head", HeadHeaderResponse
        )
        if response is None:
            msg = "beacon node reported no chain head"
            raise UpstreamError(msg)
        return response.slot

    async def get_block(
        self, client: httpx.AsyncClient, slot: int
    ) -> BeaconBlockResponse | None:
        """Get the signed beacon block for ``slot``; None if the slot was skipped."""
        return await self._get(
            client, f"/eth/v2/beacon/blocks/{slot}", BeaconBlockResponse
        )

    async def get_sync_committee(
        self, client: httpx.AsyncClient, slot: int
    ) -> SyncCommitteeResponse | None:
        """Get the sync committee for the state at ``slot``; None if not found."""
        return await self._get(
            client,
            f"/eth/v1/beacon/states/{slot}/sync_committees",
            SyncCommitteeResponse,
        )

    async def get_validators(
        self, client: httpx.AsyncClient, slot: int
    ) -> ValidatorsResponse | None:
        """Get the validator roster for the state at ``slot``; None if not found."""
        return await self._get(
            client, f"/eth/v1/beacon/states/{slot}/validators", ValidatorsResponse
        )


__all__ = ["BeaconClient"]
