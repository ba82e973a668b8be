"""Ethereum JSON-RPC client utilities."""

import asyncio
import itertools

from typing import Any

import httpx
from pydantic import ValidationError

from slot_rewards.data.blocks.models import Block, Receipt
from slot_rewards.helpers.constants import RPC_CALL_TIMEOUT
from slot_rewards.helpers.errors import UpstreamError
from slot_rewards.helpers.rpc_models import JsonRpcRequest


class RPCClient:
    """Execution-layer JSON-RPC client.

    Every call runs under its own deadline; exceeding it cancels only that
    call and surfaces as :class:`UpstreamError`.
    """

    def __init__(self, rpc_url: str, timeout: float = RPC_CALL_TIMEOUT) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint URL
            timeout: Deadline for each call in seconds

        Raises:
            ValueError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ValueError(msg)

        self.rpc_url = rpc_url
        self.timeout = timeout
        self._ids = itertools.count(1)

    async def call(
        self,
        client: httpx.AsyncClient,
        method: str,
        params: list[Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Make a single JSON-RPC call.

        Args:
            client: HTTP client instance
            method: RPC method name (e.g., "eth_blockNumber")
            params: Method parameters list
            timeout: Optional deadline override

        Returns:
            RPC result value

        Raises:
            UpstreamError: If the request fails, times out, or the node
                answers with an error object
        """
        request = JsonRpcRequest(method=method, params=params or [], id=next(self._ids))
        deadline = timeout or self.timeout

        try:
            async with asyncio.timeout(deadline):
                response = await client.post(
                    self.rpc_url, json=request.model_dump(), timeout=deadline
                )
                response.raise_for_status()
                result = response.json()
        except TimeoutError as e:
            msg = f"{method} timed out after {deadline}s"
            raise UpstreamError(msg) from e
        except httpx.HTTPError as e:
            msg = f"{method} HTTP error: {e}"
            raise UpstreamError(msg) from e
        except ValueError as e:
            msg = f"{method} returned invalid JSON"
            raise UpstreamError(msg) from e

        if not isinstance(result, dict):
            msg = f"{method} returned unexpected payload: {type(result).__name__}"
            raise UpstreamError(msg)

        if "error" in result:
            msg = f"RPC error: {result['error']}"
            raise UpstreamError(msg)

        return result.get("result")

    async def get_block_by_number(
        self, client: httpx.AsyncClient, block_number: int
    ) -> Block:
        """Fetch a block with full transaction objects by number.

        Raises:
            UpstreamError: If the block is unknown to the node or malformed
        """
        result = await self.call(
            client, "eth_getBlockByNumber", [hex(block_number), True]
        )
        return _validate_block(result, f"block {block_number}")

    async def get_block_by_hash(
        self, client: httpx.AsyncClient, block_hash: str
    ) -> Block:
        """Fetch a block with full transaction objects by hash.

        Raises:
            UpstreamError: If the block is unknown to the node or malformed
        """
        result = await self.call(client, "eth_getBlockByHash", [block_hash, True])
        return _validate_block(result, f"block {block_hash}")

    async def get_transaction_receipt(
        self, client: httpx.AsyncClient, tx_hash: str
    ) -> Receipt:
        """Fetch the receipt of a mined transaction.

        Raises:
            UpstreamError: If the receipt is missing or malformed
        """
        result = await self.call(client, "eth_getTransactionReceipt", [tx_hash])
        if result is None:
            msg = f"receipt for {tx_hash} not found"
            raise UpstreamError(msg)
        try:
            return Receipt.model_validate(result)
        except ValidationError as e:
            msg = f"malformed receipt for {tx_hash}: {e.error_count()} errors"
            raise UpstreamError(msg) from e


def _validate_block(result: Any, label: str) -> Block:
    if result is None:
        msg = f"{label} not found"
        raise UpstreamError(msg)
    try:
        return Block.model_validate(result)
    except ValidationError as e:
        msg = f"malformed {label}: {e.error_count()} errors"
        raise UpstreamError(msg) from e


__all__ = ["RPCClient"]
