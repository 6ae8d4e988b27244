"""Tests for HookManager rc file edits."""

import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from jdk_pulse.core.hook_block import BEGIN_MARKER, END_MARKER
from jdk_pulse.core.hook_manager import HookInstalled, HookManager, HookRemoved
from jdk_pulse.core.non_ideal_state import MalformedBlock, TargetUnwritable
from tests.test_utils.jdk_env import make_jdk_home


def _manager(home: Path, environ: dict[str, str] | None = None) -> HookManager:
    return HookManager(
        home_dir=home,
        state_file=home / ".jdk_current",
        environ=environ if environ is not None else {},
    )


def test_install_creates_missing_rc_file(tmp_path: Path) -> None:
    manager = _manager(tmp_path)

    result = manager.install("bash")

    assert result == HookInstalled(shell="bash", path=tmp_path / ".bashrc", action="created")
    content = (tmp_path / ".bashrc").read_text(encoding="utf-8")
    assert content.startswith(BEGIN_MARKER)
    assert (tmp_path / ".bashrc").stat().st_mode & 0o777 == 0o644


def test_install_twice_is_unchanged(tmp_path: Path) -> None:
    rc = tmp_path / ".bashrc"
    rc.write_text("export A=1\n", encoding="utf-8")
    manager = _manager(tmp_path)

    first = manager.install("bash")
    after_first = rc.read_bytes()
    second = manager.install("bash")

    assert isinstance(first, HookInstalled)
    assert first.action == "installed"
    assert isinstance(second, HookInstalled)
    assert second.action == "unchanged"
    assert rc.read_bytes() == after_first


def test_install_updates_block_for_new_state_path(tmp_path: Path) -> None:
    _manager(tmp_path).install("bash")
    moved = HookManager(
        home_dir=tmp_path, state_file=tmp_path / "elsewhere" / "state", environ={}
    )

    result = moved.install("bash")

    assert isinstance(result, HookInstalled)
    assert result.action == "updated"
    content = (tmp_path / ".bashrc").read_text(encoding="utf-8")
    assert "elsewhere/state" in content
    assert content.count(BEGIN_MARKER) == 1


def test_remove_restores_original_bytes(tmp_path: Path) -> None:
    rc = tmp_path / ".bashrc"
    original = b"# no trailing newline\nexport B=\xe2\x82\xac\xff"
    rc.write_bytes(original)
    manager = _manager(tmp_path)

    manager.install("bash")
    result = manager.remove("bash")

    assert result == HookRemoved(shell="bash", path=rc, removed=True)
    assert rc.read_bytes() == original


def test_remove_without_file_or_block(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    assert manager.remove("zsh") == HookRemoved(
        shell="zsh", path=tmp_path / ".zshrc", removed=False
    )

    (tmp_path / ".zshrc").write_text("setopt prompt_subst\n", encoding="utf-8")
    assert manager.remove("zsh") == HookRemoved(
        shell="zsh", path=tmp_path / ".zshrc", removed=False
    )


def test_zsh_honors_zdotdir(tmp_path: Path) -> None:
    zdotdir = tmp_path / "zsh-config"
    zdotdir.mkdir()
    manager = _manager(tmp_path, {"ZDOTDIR": str(zdotdir)})

    result = manager.install("zsh")

    assert isinstance(result, HookInstalled)
    assert result.path == zdotdir / ".zshrc"
    assert not (tmp_path / ".zshrc").exists()


def test_fish_config_directory_is_created(tmp_path: Path) -> None:
    result = _manager(tmp_path).install("fish")

    assert isinstance(result, HookInstalled)
    config = tmp_path / ".config" / "fish" / "config.fish"
    assert result.path == config
    assert "function _jdk_pulse_sync" in config.read_text(encoding="utf-8")


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks and modes are POSIX-specific")
def test_symlinked_rc_is_edited_at_target_and_keeps_mode(tmp_path: Path) -> None:
    dotfiles = tmp_path / "dotfiles"
    dotfiles.mkdir()
    target = dotfiles / "bashrc"
    target.write_text("export A=1\n", encoding="utf-8")
    target.chmod(0o600)
    link = tmp_path / ".bashrc"
    link.symlink_to(target)

    result = _manager(tmp_path).install("bash")

    assert isinstance(result, HookInstalled)
    assert link.is_symlink()
    assert BEGIN_MARKER in target.read_text(encoding="utf-8")
    assert target.stat().st_mode & 0o777 == 0o600


def test_directory_at_rc_path_is_unwritable(tmp_path: Path) -> None:
    (tmp_path / ".bashrc").mkdir()

    result = _manager(tmp_path).install("bash")

    assert isinstance(result, TargetUnwritable)
    assert result.path == str(tmp_path / ".bashrc")


def test_malformed_block_is_left_alone(tmp_path: Path) -> None:
    rc = tmp_path / ".bashrc"
    content = f"export A=1\n{BEGIN_MARKER}\nstale\n"
    rc.write_text(content, encoding="utf-8")
    manager = _manager(tmp_path)

    installed = manager.install("bash")
    removed = manager.remove("bash")

    assert isinstance(installed, MalformedBlock)
    assert isinstance(removed, MalformedBlock)
    assert rc.read_text(encoding="utf-8") == content
    assert manager.status("bash") == "malformed"


def test_status(tmp_path: Path) -> None:
    manager = _manager(tmp_path)
    assert manager.status("bash") == "not-installed"

    manager.install("bash")
    assert manager.status("bash") == "installed"

    manager.remove("bash")
    assert manager.status("bash") == "not-installed"


def test_snippet_embeds_quoted_state_path(tmp_path: Path) -> None:
    home = tmp_path / "with space"
    home.mkdir()
    manager = _manager(home)

    bash = manager.snippet("bash")
    fish = manager.snippet("fish")

    assert f"'{home / '.jdk_current'}'" in bash
    assert f"'{home / '.jdk_current'}'" in fish
    assert "__JDK_PULSE_STATE_FILE__" not in bash


def test_rendered_block_is_delimited(tmp_path: Path) -> None:
    block = _manager(tmp_path).render_block("zsh")

    assert block.startswith(BEGIN_MARKER + "\n")
    assert block.endswith(END_MARKER + "\n")
    assert "add-zsh-hook precmd _jdk_pulse_sync" in block


@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")
def test_bash_hook_follows_state_file(tmp_path: Path) -> None:
    bash = shutil.which("bash")
    assert bash is not None
    jdk_a = make_jdk_home(tmp_path, "a")
    jdk_b = make_jdk_home(tmp_path, "b")
    state = tmp_path / ".jdk_current"
    state.write_text(f"{jdk_a}\n", encoding="utf-8")
    manager = _manager(tmp_path)
    manager.install("bash")
    script = (
        '. "$1"\n'
        "printf '%s\\n' \"$JAVA_HOME|$PATH\"\n"
        "printf '%s\\n' \"$2\" > \"$3\"\n"
        "_jdk_pulse_sync\n"
        "printf '%s\\n' \"$JAVA_HOME|$PATH\"\n"
    )

    result = subprocess.run(
        [
            bash,
            "--norc",
            "--noprofile",
            "-c",
            script,
            "_",
            str(tmp_path / ".bashrc"),
            str(jdk_b),
            str(state),
        ],
        env={"PATH": "/usr/bin:/bin", "HOME": str(tmp_path)},
        capture_output=True,
        text=True,
        check=True,
    )

    first, second = result.stdout.splitlines()
    assert first == f"{jdk_a}|{jdk_a}/bin:/usr/bin:/bin"
    assert second == f"{jdk_b}|{jdk_b}/bin:/usr/bin:/bin"


def test_status_unreadable_rc_file(tmp_path: Path) -> None:
    (tmp_path / ".bashrc").mkdir()

    assert _manager(tmp_path).status("bash") == "unreadable"
