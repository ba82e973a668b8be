"""Reference slots and blocks checked against live mainnet nodes.

Needs ETH_RPC_URL (an archive node) and optionally BEACON_ENDPOINT.
"""

import pytest

from slot_rewards.analysis.models import RewardResult
from slot_rewards.helpers.config import load_settings
from slot_rewards.services import build_services


pytestmark = pytest.mark.integration


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("slot", "block_reward", "mev_reward", "mev"),
    [
        (9197117, 113757939, 105971629, True),
        (9197119, 49106970, 49426618, True),
        (9197120, 4699116, 0, False),
        (9197121, 47357205, 41136528, True),
        # Built by a known builder that sent no payment from its own address
        (9197118, 18717163, 0, True),
    ],
)
async def test_reference_slot(
    slot: int, block_reward: int, mev_reward: int, mev: bool
) -> None:
    services = build_services(load_settings())
    try:
        outcome = await services.rewards.reward_for_slot(services.http_client, slot)
    finally:
        await services.aclose()

    assert not outcome.not_found
    assert outcome.result.mev is mev
    assert outcome.result.block_reward == block_reward
    assert outcome.result.mev_reward == mev_reward


@pytest.mark.asyncio
async def test_skipped_reference_slot() -> None:
    services = build_services(load_settings())
    try:
        outcome = await services.rewards.reward_for_slot(services.http_client, 9208672)
    finally:
        await services.aclose()

    assert outcome.not_found
    assert outcome.result == RewardResult.empty()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("block_number", "block_reward", "mev_reward", "mev"),
    [
        (19992375, 113757939, 105971629, True),
        (19985006, 92597994, 94677617, True),
        (19985005, 14665998, 0, False),
        (19985007, 19866511, 70887761, True),
        (19985021, 45081021, 44192994, True),
        # Merge
        (15537400, 456279177, 0, False),
        (15537300, 2117027595, 0, False),
        # Constantinople
        (7280900, 2262921137, 0, False),
        (7270000, 3106084374, 0, False),
        # Byzantium
        (4370100, 3111209062, 0, False),
        (4360100, 5181177404, 0, False),
    ],
)
async def test_reference_block(
    block_number: int, block_reward: int, mev_reward: int, mev: bool
) -> None:
    services = build_services(load_settings())
    try:
        result = await services.rewards.reward_for_block_number(
            services.http_client, block_number
        )
    finally:
        await services.aclose()

    assert result.mev is mev
    assert result.block_reward == block_reward
    assert result.mev_reward == mev_reward
