"""Install, remove and inspect the jdk-pulse hook in shell rc files."""

import logging
import os
import shlex
import stat
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from jdk_pulse.core.hook_block import (
    MalformedRegion,
    install_block,
    remove_block,
    render_block,
    split_hook_region,
)
from jdk_pulse.core.non_ideal_state import MalformedBlock, TargetUnwritable
from jdk_pulse.core.shells import rc_file_path
from jdk_pulse.core.types import HookStatus, ShellKind
from jdk_pulse.gateway.state_store.real import atomic_write_bytes

logger = logging.getLogger(__name__)

STATE_FILE_TOKEN = "__JDK_PULSE_STATE_FILE__"
_NEW_FILE_MODE = 0o644

InstallAction = Literal["created", "installed", "updated", "unchanged"]


def shell_integration_dir() -> Path:
    return Path(__file__).parent.parent / "shell_integration"


def _fish_quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def quote_for_shell(shell: ShellKind, value: str) -> str:
    if shell == "fish":
        return _fish_quote(value)
    return shlex.quote(value)


@dataclass(frozen=True)
class HookInstalled:
    shell: ShellKind
    path: Path
    action: InstallAction


@dataclass(frozen=True)
class HookRemoved:
    shell: ShellKind
    path: Path
    removed: bool


class HookManager:
    """Edits the delimited jdk-pulse block in each shell's rc file.

    Content outside the markers is never modified. Symlinked rc files are
    edited at their target, keeping the file mode.
    """

    def __init__(
        self,
        *,
        home_dir: Path,
        state_file: Path,
        environ: Mapping[str, str],
        integration_dir: Path | None = None,
    ) -> None:
        self._home_dir = home_dir
        self._state_file = state_file
        self._environ = environ
        self._integration_dir = (
            integration_dir if integration_dir is not None else shell_integration_dir()
        )

    def rc_path(self, shell: ShellKind) -> Path:
        return rc_file_path(shell, home_dir=self._home_dir, environ=self._environ)

    def snippet(self, shell: ShellKind) -> str:
        """The shell code run on load and before each prompt."""
        template = (self._integration_dir / f"hook.{shell}").read_text(encoding="utf-8")
        return template.replace(STATE_FILE_TOKEN, quote_for_shell(shell, str(self._state_file)))

    def render_block(self, shell: ShellKind) -> str:
        return render_block(self.snippet(shell), added_newline=False)

    def install(self, shell: ShellKind) -> HookInstalled | TargetUnwritable | MalformedBlock:
        path = self.rc_path(shell)
        target = _resolve_target(path)
        existing = _read_text(target)
        if isinstance(existing, TargetUnwritable):
            return existing

        content = existing if existing is not None else ""
        updated = install_block(content, self.snippet(shell))
        if isinstance(updated, MalformedRegion):
            return MalformedBlock(path=str(target), reason=updated.reason)
        if updated == content and existing is not None:
            logger.debug("Hook in %s already up to date", target)
            return HookInstalled(shell=shell, path=path, action="unchanged")

        if existing is None:
            action: InstallAction = "created"
        elif split_hook_region(content) is None:
            action = "installed"
        else:
            action = "updated"

        failed = _write_text(target, updated)
        if failed is not None:
            return failed
        logger.debug("Hook %s in %s", action, target)
        return HookInstalled(shell=shell, path=path, action=action)

    def remove(self, shell: ShellKind) -> HookRemoved | TargetUnwritable | MalformedBlock:
        path = self.rc_path(shell)
        target = _resolve_target(path)
        existing = _read_text(target)
        if isinstance(existing, TargetUnwritable):
            return existing
        if existing is None:
            return HookRemoved(shell=shell, path=path, removed=False)

        updated = remove_block(existing)
        if isinstance(updated, MalformedRegion):
            return MalformedBlock(path=str(target), reason=updated.reason)
        if updated == existing:
            return HookRemoved(shell=shell, path=path, removed=False)

        failed = _write_text(target, updated)
        if failed is not None:
            return failed
        logger.debug("Hook removed from %s", target)
        return HookRemoved(shell=shell, path=path, removed=True)

    def status(self, shell: ShellKind) -> HookStatus:
        existing = _read_text(_resolve_target(self.rc_path(shell)))
        if existing is None:
            return "not-installed"
        if isinstance(existing, TargetUnwritable):
            logger.debug("%s", existing.message)
            return "unreadable"
        found = split_hook_region(existing)
        if found is None:
            return "not-installed"
        if isinstance(found, MalformedRegion):
            return "malformed"
        return "installed"


def _resolve_target(path: Path) -> Path:
    if path.is_symlink():
        return Path(os.path.realpath(path))
    return path


def _read_text(path: Path) -> str | None | TargetUnwritable:
    """File content, or None if the file does not exist."""
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        return TargetUnwritable(path=str(path), reason=e.strerror or str(e))
    return raw.decode("utf-8", errors="surrogateescape")


def _write_text(path: Path, content: str) -> TargetUnwritable | None:
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = _NEW_FILE_MODE
    except OSError as e:
        return TargetUnwritable(path=str(path), reason=e.strerror or str(e))
    if path.exists() and not os.access(path, os.W_OK):
        return TargetUnwritable(path=str(path), reason="file is not writable")
    try:
        atomic_write_bytes(path, content.encode("utf-8", errors="surrogateescape"), mode=mode)
    except OSError as e:
        return TargetUnwritable(path=str(path), reason=e.strerror or str(e))
    return None
