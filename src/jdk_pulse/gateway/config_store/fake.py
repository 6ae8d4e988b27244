"""Fake ConfigStore implementation for testing."""

from pathlib import Path
from typing import Any

from jdk_pulse.core.config import GlobalConfig, with_value
from jdk_pulse.core.non_ideal_state import TargetUnwritable
from jdk_pulse.gateway.config_store.abc import ConfigStore


class FakeConfigStore(ConfigStore):
    """In-memory fake that tracks saved values.

    This class has NO public setup methods beyond constructor.
    """

    def __init__(
        self,
        *,
        config: GlobalConfig,
        home_dir: Path | None = None,
        path: Path | None = None,
    ) -> None:
        self._config = config
        self._home_dir = home_dir if home_dir is not None else Path("/fake/home")
        self._path = path if path is not None else Path("/fake/home/.jdk-pulse/config.toml")
        self._saved_values: list[tuple[str, Any]] = []

    @property
    def saved_values(self) -> list[tuple[str, Any]]:
        """(key, value) pairs passed to set_value(). For test assertions only."""
        return list(self._saved_values)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> GlobalConfig:
        return self._config

    def set_value(self, key: str, value: Any) -> GlobalConfig | TargetUnwritable:
        self._config = with_value(self._config, key, value, home_dir=self._home_dir)
        self._saved_values.append((key, value))
        return self._config
