"""Known MEV builder fee-recipient addresses."""

import json
from pathlib import Path

from typing import Any

from slot_rewards.helpers.logging import get_logger


logger = get_logger(__name__)


class BuilderRegistryError(Exception):
    """The builder registry source is missing or malformed."""


class BuilderRegistry:
    """Read-only mapping of lowercase fee-recipient address to builder label."""

    def __init__(self, builders: dict[str, str]) -> None:
        self._builders = {address.lower(): name for address, name in builders.items()}

    @classmethod
    def from_file(cls, path: str | Path) -> "BuilderRegistry":
        """Load the registry from a JSON object of ``{address: label}``.

        Raises:
            BuilderRegistryError: If the file cannot be read or is not such an object
        """
        path = Path(path)
        try:
            raw: Any = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            msg = f"Cannot read builder registry {path}: {e}"
            raise BuilderRegistryError(msg) from e
        except json.JSONDecodeError as e:
            msg = f"Builder registry {path} is not valid JSON: {e}"
            raise BuilderRegistryError(msg) from e

        if not isinstance(raw, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in raw.items()
        ):
            msg = f"Builder registry {path} must map address strings to names"
            raise BuilderRegistryError(msg)

        registry = cls(raw)
        logger.info("Loaded %d known builders from %s", len(registry), path)
        return registry

    def is_builder(self, address: str) -> bool:
        """Whether ``address`` (any case) belongs to a known builder."""
        return address.lower() in self._builders

    def name_for(self, address: str) -> str | None:
        """Builder label for ``address``, or None if unknown."""
        return self._builders.get(address.lower())

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.is_builder(address)

    def __len__(self) -> int:
        return len(self._builders)


__all__ = ["BuilderRegistry", "BuilderRegistryError"]
