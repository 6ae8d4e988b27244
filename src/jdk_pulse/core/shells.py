"""Shell identification and rc file locations."""

from collections.abc import Mapping
from pathlib import Path

from jdk_pulse.core.types import SUPPORTED_SHELLS, ShellKind


def shell_kind_from_path(shell_path: str) -> ShellKind | None:
    """Map an executable path like ``/bin/zsh`` to a supported shell.

    Examples:
        >>> shell_kind_from_path("/usr/local/bin/fish")
        'fish'
        >>> shell_kind_from_path("/bin/tcsh") is None
        True
    """
    name = Path(shell_path).name
    # login shells are sometimes reported as "-zsh"
    name = name.lstrip("-")
    for kind in SUPPORTED_SHELLS:
        if name == kind:
            return kind
    return None


def detect_login_shell(environ: Mapping[str, str]) -> ShellKind | None:
    """The user's shell according to ``$SHELL``, if it is one we support."""
    shell_path = environ.get("SHELL")
    if not shell_path:
        return None
    return shell_kind_from_path(shell_path)


def rc_file_path(shell: ShellKind, *, home_dir: Path, environ: Mapping[str, str]) -> Path:
    """The interactive startup file the hook block is written to."""
    if shell == "bash":
        return home_dir / ".bashrc"
    if shell == "zsh":
        zdotdir = environ.get("ZDOTDIR")
        base = Path(zdotdir) if zdotdir else home_dir
        return base / ".zshrc"
    return home_dir / ".config" / "fish" / "config.fish"
