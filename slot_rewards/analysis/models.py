"""Pydantic models for reward computation results."""

from pydantic import BaseModel, ConfigDict, Field


class FeeTotal(BaseModel):
    """Aggregate of transaction fees paid in a block.

    ``failed_lookups`` counts receipts that could not be fetched; each one
    contributed nothing to ``total_wei``, so any non-zero count means the
    total is understated.
    """

    model_config = ConfigDict(frozen=True)

    total_wei: int = 0
    transaction_count: int = 0
    failed_lookups: int = 0

    @property
    def degraded(self) -> bool:
        return self.failed_lookups > 0


class RewardResult(BaseModel):
    """Execution-layer reward of a block, in Gwei."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mev: bool = Field(default=False, alias="status", description="Built by a known builder")
    block_reward: int = Field(default=0, alias="blockReward", description="Gwei")
    mev_reward: int = Field(default=0, alias="mevReward", description="Gwei")
    failed_receipts: int = Field(
        default=0,
        alias="failedReceipts",
        description="Receipts missing from the fee total",
    )

    @classmethod
    def empty(cls) -> "RewardResult":
        """Result reported for a skipped slot."""
        return cls()


class RewardOutcome(BaseModel):
    """Reward for a slot together with whether the slot held a block."""

    model_config = ConfigDict(frozen=True)

    result: RewardResult
    not_found: bool = False


__all__ = ["FeeTotal", "RewardOutcome", "RewardResult"]
