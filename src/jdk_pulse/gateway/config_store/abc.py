"""Abstract base class for the jdk-pulse configuration file.

ConfigStore gives access to ``~/.jdk-pulse/config.toml`` so that nothing
else calls ``Path.home()`` for configuration.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from jdk_pulse.core.config import GlobalConfig
from jdk_pulse.core.non_ideal_state import TargetUnwritable


class ConfigStore(ABC):
    """Abstract interface for reading and updating global configuration."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """Location of the config file (may not exist)."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load configuration.

        A missing file yields the defaults. A malformed file also yields the
        defaults, with a warning logged.
        """
        ...

    @abstractmethod
    def set_value(self, key: str, value: Any) -> GlobalConfig | TargetUnwritable:
        """Persist one TOML-native value, preserving the rest of the file.

        Returns:
            The updated configuration, or TargetUnwritable if the file could
            not be written

        Raises:
            ValueError: If the key is unknown or the value is invalid
        """
        ...
