"""Production EnvPropagator implementations, one per platform family."""

import logging

from jdk_pulse.core.non_ideal_state import PropagationFailed
from jdk_pulse.core.platform import PlatformFamily
from jdk_pulse.core.subprocess_utils import CompletedRun, run_bounded
from jdk_pulse.core.types import ActiveSelection
from jdk_pulse.gateway.env_propagation.abc import (
    EnvPropagator,
    PropagationApplied,
    PropagationOutcome,
    PropagationSkipped,
)

logger = logging.getLogger(__name__)

WINDOWS_JAVA_BIN_ENTRY = r"%JAVA_HOME%\bin"

# Win32 constants for the WM_SETTINGCHANGE broadcast
_HWND_BROADCAST = 0xFFFF
_WM_SETTINGCHANGE = 0x001A
_SMTO_ABORTIFHUNG = 0x0002
_BROADCAST_TIMEOUT_MS = 5000


def _same_entry(a: str, b: str) -> bool:
    return a.rstrip("\\/").casefold() == b.rstrip("\\/").casefold()


def prepend_path_entry(path_value: str, entry: str) -> str:
    """Put ``entry`` first in a ``;``-separated search path, exactly once.

    Examples:
        >>> prepend_path_entry(r"C:\\tools;%JAVA_HOME%\\bin", r"%JAVA_HOME%\\bin")
        '%JAVA_HOME%\\\\bin;C:\\\\tools'
    """
    kept = [p for p in path_value.split(";") if p and not _same_entry(p, entry)]
    return ";".join([entry, *kept])


def remove_path_entry(path_value: str, entry: str) -> str:
    """Drop every occurrence of ``entry`` from a ``;``-separated search path."""
    return ";".join(p for p in path_value.split(";") if p and not _same_entry(p, entry))


class NoOpEnvPropagator(EnvPropagator):
    """Store-and-poll platforms: shell hooks read the state file themselves."""

    @property
    def mechanism(self) -> str:
        return "none"

    @property
    def supports_global_store(self) -> bool:
        return False

    def propagate(self, selection: ActiveSelection) -> PropagationOutcome:
        return PropagationSkipped(mechanism=self.mechanism)

    def read_current(self) -> str | None:
        return None


class LaunchctlEnvPropagator(EnvPropagator):
    """macOS: set JAVA_HOME in the launchd user session.

    Applications launched afterwards (IDEs started from the Dock, for
    example) inherit it. PATH is left alone: launchd's PATH is only
    configurable system-wide and shells get it from the hook anyway.
    """

    def __init__(self, *, timeout: float) -> None:
        self._timeout = timeout

    @property
    def mechanism(self) -> str:
        return "launchctl"

    @property
    def supports_global_store(self) -> bool:
        return True

    def propagate(self, selection: ActiveSelection) -> PropagationOutcome:
        if selection.home is None:
            cmd = ["launchctl", "unsetenv", "JAVA_HOME"]
        else:
            cmd = ["launchctl", "setenv", "JAVA_HOME", selection.home]
        result = run_bounded(cmd, timeout=self._timeout, cancel=None)
        if not isinstance(result, CompletedRun):
            return PropagationFailed(mechanism=self.mechanism, reason=result.message)
        if result.returncode != 0:
            reason = result.stderr.strip() or f"exit status {result.returncode}"
            return PropagationFailed(mechanism=self.mechanism, reason=reason)
        logger.debug("launchctl JAVA_HOME -> %s", selection.home)
        return PropagationApplied(mechanism=self.mechanism, home=selection.home)

    def read_current(self) -> str | None:
        result = run_bounded(
            ["launchctl", "getenv", "JAVA_HOME"], timeout=self._timeout, cancel=None
        )
        if not isinstance(result, CompletedRun) or result.returncode != 0:
            return None
        return result.stdout.strip() or None


class WindowsEnvPropagator(EnvPropagator):
    """Windows: per-user ``HKCU\\Environment`` plus a WM_SETTINGCHANGE broadcast."""

    @property
    def mechanism(self) -> str:
        return "windows-registry"

    @property
    def supports_global_store(self) -> bool:
        return True

    def propagate(self, selection: ActiveSelection) -> PropagationOutcome:
        try:
            import winreg
        except ImportError:
            return PropagationFailed(mechanism=self.mechanism, reason="winreg not available")

        try:
            access = winreg.KEY_READ | winreg.KEY_WRITE
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, "Environment", 0, access) as key:
                try:
                    path_value, _ = winreg.QueryValueEx(key, "Path")
                except FileNotFoundError:
                    path_value = ""
                if selection.home is None:
                    try:
                        winreg.DeleteValue(key, "JAVA_HOME")
                    except FileNotFoundError:
                        pass
                    new_path = remove_path_entry(path_value, WINDOWS_JAVA_BIN_ENTRY)
                else:
                    winreg.SetValueEx(key, "JAVA_HOME", 0, winreg.REG_SZ, selection.home)
                    new_path = prepend_path_entry(path_value, WINDOWS_JAVA_BIN_ENTRY)
                if new_path != path_value:
                    # REG_EXPAND_SZ so %JAVA_HOME% is expanded by consumers
                    winreg.SetValueEx(key, "Path", 0, winreg.REG_EXPAND_SZ, new_path)
        except OSError as e:
            return PropagationFailed(mechanism=self.mechanism, reason=str(e))

        if not _broadcast_environment_change():
            return PropagationFailed(
                mechanism=self.mechanism,
                reason="environment updated but the WM_SETTINGCHANGE broadcast failed",
            )
        return PropagationApplied(mechanism=self.mechanism, home=selection.home)

    def read_current(self) -> str | None:
        try:
            import winreg
        except ImportError:
            return None
        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, "Environment") as key:
                value, _ = winreg.QueryValueEx(key, "JAVA_HOME")
        except OSError:
            return None
        return str(value) or None


def _broadcast_environment_change() -> bool:
    import ctypes
    from ctypes import wintypes

    result = wintypes.DWORD()
    sent = ctypes.windll.user32.SendMessageTimeoutW(  # type: ignore[attr-defined]
        _HWND_BROADCAST,
        _WM_SETTINGCHANGE,
        0,
        "Environment",
        _SMTO_ABORTIFHUNG,
        _BROADCAST_TIMEOUT_MS,
        ctypes.byref(result),
    )
    return bool(sent)


def default_propagator(platform: PlatformFamily, *, enabled: bool, timeout: float) -> EnvPropagator:
    """Pick the propagation strategy for a platform (``enabled=False`` forces no-op)."""
    if not enabled:
        return NoOpEnvPropagator()
    if platform == "windows":
        return WindowsEnvPropagator()
    if platform == "macos":
        return LaunchctlEnvPropagator(timeout=timeout)
    return NoOpEnvPropagator()
