"""Real ConfigStore implementation.

Reads with ``tomllib`` and writes with ``tomlkit`` so that comments and
formatting in a hand-edited config survive ``jdk-pulse config set``.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from jdk_pulse.core.config import GlobalConfig, config_from_mapping, with_value
from jdk_pulse.core.non_ideal_state import TargetUnwritable
from jdk_pulse.gateway.config_store.abc import ConfigStore
from jdk_pulse.gateway.state_store.real import atomic_write_bytes

logger = logging.getLogger(__name__)


def default_config_path(home_dir: Path) -> Path:
    return home_dir / ".jdk-pulse" / "config.toml"


class RealConfigStore(ConfigStore):
    """Production implementation backed by a TOML file."""

    def __init__(self, *, path: Path, home_dir: Path) -> None:
        self._path = path
        self._home_dir = home_dir

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> GlobalConfig:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return GlobalConfig.default(self._home_dir)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s (%s); using defaults", self._path, e)
            return GlobalConfig.default(self._home_dir)
        try:
            return config_from_mapping(tomllib.loads(text), home_dir=self._home_dir)
        except (tomllib.TOMLDecodeError, ValueError) as e:
            logger.warning("Malformed config %s (%s); using defaults", self._path, e)
            return GlobalConfig.default(self._home_dir)

    def set_value(self, key: str, value: Any) -> GlobalConfig | TargetUnwritable:
        # Validate before touching the file
        updated = with_value(self.load(), key, value, home_dir=self._home_dir)

        if self._path.exists():
            try:
                doc = tomlkit.parse(self._path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, ParseError) as e:
                return TargetUnwritable(path=str(self._path), reason=f"cannot parse: {e}")
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("jdk-pulse configuration"))
        doc[key] = value

        try:
            atomic_write_bytes(self._path, tomlkit.dumps(doc).encode("utf-8"))
        except OSError as e:
            return TargetUnwritable(path=str(self._path), reason=str(e))
        logger.debug("Set %s=%r in %s", key, value, self._path)
        return updated
