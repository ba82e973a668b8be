"""Concurrent aggregation of transaction fees over a block."""

import asyncio
from collections.abc import Sequence

import httpx

from slot_rewards.analysis.models import FeeTotal
from slot_rewards.data.blocks.models import Receipt, Transaction
from slot_rewards.helpers.cache import MemoryCache
from slot_rewards.helpers.constants import RECEIPT_BATCH_SIZE
from slot_rewards.helpers.errors import UpstreamError
from slot_rewards.helpers.logging import get_logger
from slot_rewards.helpers.rpc import RPCClient


logger = get_logger(__name__)


class FeeAggregator:
    """Sums ``gasUsed * effectiveGasPrice`` over a block's transactions.

    Receipts are looked up in batches: every transaction of a batch is fetched
    concurrently and the next batch starts only once the whole batch is done,
    which caps in-flight RPC calls at ``batch_size``.
    """

    def __init__(
        self,
        rpc: RPCClient,
        receipt_cache: MemoryCache[str, Receipt] | None = None,
        batch_size: int = RECEIPT_BATCH_SIZE,
    ) -> None:
        """Initialize the aggregator.

        Args:
            rpc: Execution-layer RPC client
            receipt_cache: Cache of receipts by transaction hash
            batch_size: Maximum number of concurrent receipt lookups

        Raises:
            ValueError: If batch_size is not positive
        """
        if batch_size <= 0:
            msg = f"batch_size must be positive, got {batch_size}"
            raise ValueError(msg)

        self.rpc = rpc
        self.receipt_cache = (
            MemoryCache("receipts") if receipt_cache is None else receipt_cache
        )
        self.batch_size = batch_size

    async def get_receipt(self, client: httpx.AsyncClient, tx_hash: str) -> Receipt:
        """Receipt for ``tx_hash``, from cache or the node.

        Only successful lookups are cached.

        Raises:
            UpstreamError: If the node cannot supply the receipt
        """
        cached, found = self.receipt_cache.get(tx_hash)
        if found and cached is not None:
            return cached

        receipt = await self.rpc.get_transaction_receipt(client, tx_hash)
        self.receipt_cache.set(tx_hash, receipt)
        return receipt

    async def _transaction_fee(
        self, client: httpx.AsyncClient, tx: Transaction
    ) -> int | None:
        try:
            receipt = await self.get_receipt(client, tx.hash)
        except UpstreamError as e:
            logger.warning("Receipt lookup failed for %s: %s", tx.hash, e)
            return None

        logger.debug(
            "%s gas_used=%d effective_gas_price=%d fee=%d",
            tx.hash,
            receipt.gas_used,
            receipt.effective_gas_price,
            receipt.fee,
        )
        return receipt.fee

    async def aggregate_fees(
        self, client: httpx.AsyncClient, transactions: Sequence[Transaction]
    ) -> FeeTotal:
        """Total fee paid by ``transactions`` in wei.

        A receipt that cannot be fetched is logged and counted in
        ``FeeTotal.failed_lookups``; it adds nothing to the total and does not
        abort the rest of the aggregation.
        """
        fees: list[int | None] = []

        batches = [
            transactions[i : i + self.batch_size]
            for i in range(0, len(transactions), self.batch_size)
        ]
        for batch in batches:
            fees.extend(
                await asyncio.gather(
                    *[self._transaction_fee(client, tx) for tx in batch]
                )
            )

        failed = sum(1 for fee in fees if fee is None)
        if failed:
            logger.warning(
                "Fee total understated: %d of %d receipts unavailable",
                failed,
                len(transactions),
            )

        return FeeTotal(
            total_wei=sum(fee for fee in fees if fee is not None),
            transaction_count=len(transactions),
            failed_lookups=failed,
        )


__all__ = ["FeeAggregator"]
