"""Tests for the command-line interface."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from slot_rewards import cli
from slot_rewards.analysis.models import RewardOutcome, RewardResult
from slot_rewards.analysis.rewards import RewardEngine
from slot_rewards.data.beacon.committee import SyncCommitteeService
from slot_rewards.data.beacon.slots import SlotResolver
from slot_rewards.helpers.errors import SlotInFutureError, UpstreamError
from slot_rewards.services import Caches, Services


@pytest.fixture
def services(monkeypatch: pytest.MonkeyPatch) -> Services:
    services = Services(
        settings=MagicMock(),
        http_client=AsyncMock(spec=httpx.AsyncClient),
        resolver=AsyncMock(spec=SlotResolver),
        rewards=AsyncMock(spec=RewardEngine),
        committees=AsyncMock(spec=SyncCommitteeService),
        caches=Caches(),
    )
    monkeypatch.setattr(cli, "load_settings", MagicMock())
    monkeypatch.setattr(cli, "build_services", MagicMock(return_value=services))
    return services


class TestCli:
    def test_reward_for_slot(
        self, services: Services, capsys: pytest.CaptureFixture[str]
    ) -> None:
        services.rewards.reward_for_slot.return_value = RewardOutcome(
            result=RewardResult(mev=True, block_reward=113757939, mev_reward=105971629)
        )

        assert cli.main(["reward", "9197117"]) == 0

        out = capsys.readouterr().out
        assert "113,757,939" in out
        assert "105,971,629" in out
        services.http_client.aclose.assert_awaited_once()

    def test_reward_for_block(
        self, services: Services, capsys: pytest.CaptureFixture[str]
    ) -> None:
        services.rewards.reward_for_block_number.return_value = RewardResult(block_reward=42)

        assert cli.main(["reward", "--block", "19992375"]) == 0

        services.rewards.reward_for_block_number.assert_awaited_once_with(
            services.http_client, 19992375
        )
        services.resolver.ensure_not_future.assert_not_awaited()

    def test_skipped_slot(
        self, services: Services, capsys: pytest.CaptureFixture[str]
    ) -> None:
        services.rewards.reward_for_slot.return_value = RewardOutcome(
            result=RewardResult.empty(), not_found=True
        )

        assert cli.main(["reward", "9208672"]) == 1
        assert "does not exist or was skipped" in capsys.readouterr().out

    def test_invalid_slot(self, services: Services) -> None:
        assert cli.main(["reward", "abc"]) == 2
        services.rewards.reward_for_slot.assert_not_awaited()

    def test_future_slot(self, services: Services) -> None:
        services.resolver.ensure_not_future.side_effect = SlotInFutureError(10, 5)

        assert cli.main(["syncduties", "10"]) == 2

    def test_upstream_failure(self, services: Services) -> None:
        services.committees.sync_duty_pubkeys.side_effect = UpstreamError("down")

        assert cli.main(["syncduties", "10"]) == 1
        services.http_client.aclose.assert_awaited_once()

    def test_sync_duties(
        self, services: Services, capsys: pytest.CaptureFixture[str]
    ) -> None:
        services.committees.sync_duty_pubkeys.return_value = ["0xpk1", "0xpk2"]

        assert cli.main(["syncduties", "10"]) == 0

        out = capsys.readouterr().out
        assert "0xpk1" in out
        assert "0xpk2" in out

    def test_slot_and_block_are_exclusive(self, services: Services) -> None:
        with pytest.raises(SystemExit):
            cli.main(["reward", "1", "--block", "2"])
