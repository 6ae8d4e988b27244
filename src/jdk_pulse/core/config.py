"""Global configuration for jdk-pulse.

Loaded once at CLI entry point (see ``ConfigStore``) and stored in the
context. Values in ``config.toml`` use native TOML types; ``parse_cli_value``
turns the strings given to ``jdk-pulse config set`` into those types.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from functools import cache
from pathlib import Path
from typing import Any, Literal, cast

from jdk_pulse.core.types import SUPPORTED_SHELLS, ShellKind

logger = logging.getLogger(__name__)

PropagationMode = Literal["auto", "none"]

DEFAULT_PROBE_TIMEOUT = 10.0
STATE_FILE_NAME = ".jdk_current"


@cache
def get_config_keys() -> dict[str, str]:
    """User-exposed config keys with descriptions, in display order."""
    return {
        "state_file": "Path of the file holding the selected JDK home",
        "probe_timeout": "Seconds before discovery commands and shell probes are killed",
        "extra_jdk_dirs": "Additional directories whose children are JDK installs",
        "external_tools": "Tools the doctor checks for on PATH",
        "shells": "Shells the doctor checks hooks for (empty = login shell)",
        "propagation": "OS environment propagation: auto or none",
    }


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data."""

    state_file: Path
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    extra_jdk_dirs: tuple[Path, ...] = ()
    external_tools: tuple[str, ...] = ("docker",)
    shells: tuple[ShellKind, ...] = ()
    propagation: PropagationMode = "auto"

    @staticmethod
    def default(home_dir: Path) -> "GlobalConfig":
        return GlobalConfig(state_file=home_dir / STATE_FILE_NAME)

    @staticmethod
    def test(
        state_file: Path,
        *,
        probe_timeout: float = 2.0,
        extra_jdk_dirs: tuple[Path, ...] = (),
        external_tools: tuple[str, ...] = (),
        shells: tuple[ShellKind, ...] = ("bash",),
        propagation: PropagationMode = "none",
    ) -> "GlobalConfig":
        """Create a GlobalConfig with sensible test defaults."""
        return GlobalConfig(
            state_file=state_file,
            probe_timeout=probe_timeout,
            extra_jdk_dirs=extra_jdk_dirs,
            external_tools=external_tools,
            shells=shells,
            propagation=propagation,
        )

    def display_value(self, key: str) -> str:
        """Render one key for ``config show``."""
        value = getattr(self, key)
        if isinstance(value, tuple):
            return ",".join(str(item) for item in value)
        if isinstance(value, float):
            return f"{value:g}"
        return str(value)


def _expand(raw: str, home_dir: Path) -> Path:
    if raw == "~":
        return home_dir
    if raw.startswith("~/"):
        return home_dir / raw[2:]
    return Path(raw)


def _string_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{key} must be a list of strings")
    return value


def with_value(config: GlobalConfig, key: str, value: Any, *, home_dir: Path) -> GlobalConfig:
    """Return ``config`` with ``key`` set from a TOML-native ``value``.

    Raises:
        ValueError: If the key is unknown or the value has the wrong type
    """
    if key == "state_file":
        if not isinstance(value, str) or not value:
            raise ValueError("state_file must be a non-empty string")
        path = _expand(value, home_dir)
        if not path.is_absolute():
            raise ValueError(f"state_file must be absolute, got {value!r}")
        return replace(config, state_file=path)
    if key == "probe_timeout":
        if isinstance(value, bool) or not isinstance(value, int | float) or value <= 0:
            raise ValueError("probe_timeout must be a positive number")
        return replace(config, probe_timeout=float(value))
    if key == "extra_jdk_dirs":
        dirs = tuple(_expand(item, home_dir) for item in _string_list(key, value))
        return replace(config, extra_jdk_dirs=dirs)
    if key == "external_tools":
        return replace(config, external_tools=tuple(_string_list(key, value)))
    if key == "shells":
        shells = _string_list(key, value)
        unsupported = [s for s in shells if s not in SUPPORTED_SHELLS]
        if unsupported:
            raise ValueError(f"unsupported shell(s): {', '.join(unsupported)}")
        return replace(config, shells=tuple(cast(ShellKind, s) for s in shells))
    if key == "propagation":
        if value not in ("auto", "none"):
            raise ValueError("propagation must be 'auto' or 'none'")
        return replace(config, propagation=cast(PropagationMode, value))
    raise ValueError(f"Invalid key: {key}")


def config_from_mapping(data: Mapping[str, Any], *, home_dir: Path) -> GlobalConfig:
    """Build a GlobalConfig from parsed TOML, starting from the defaults.

    Unknown keys are ignored with a warning.

    Raises:
        ValueError: If a known key has an invalid value
    """
    config = GlobalConfig.default(home_dir)
    for key, value in data.items():
        if key not in get_config_keys():
            logger.warning("Ignoring unknown config key %r", key)
            continue
        config = with_value(config, key, value, home_dir=home_dir)
    return config


def parse_cli_value(key: str, raw: str) -> str | float | list[str]:
    """Convert a ``config set`` argument into the TOML value stored for ``key``.

    List keys take comma-separated values; an empty string clears the list.

    Raises:
        ValueError: If the key is unknown or the value cannot be converted
    """
    if key not in get_config_keys():
        raise ValueError(f"Invalid key: {key}")
    if key == "probe_timeout":
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"Invalid number: {raw}") from None
    if key in ("extra_jdk_dirs", "external_tools", "shells"):
        return [item.strip() for item in raw.split(",") if item.strip()]
    return raw
