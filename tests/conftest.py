"""Pytest configuration and shared fixtures."""

import os

import pytest

from factories import BUILDER
from slot_rewards.data.builders.registry import BuilderRegistry


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip live-endpoint tests unless an execution RPC URL is configured."""
    if os.getenv("ETH_RPC_URL"):
        return
    skip = pytest.mark.skip(reason="ETH_RPC_URL not set")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def registry() -> BuilderRegistry:
    """Registry with a single known builder."""
    return BuilderRegistry({BUILDER: "beaverbuild"})
