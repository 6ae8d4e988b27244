"""Tests for jdk-pulse clear."""

from pathlib import Path

from click.testing import CliRunner

from jdk_pulse.cli.cli import cli
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.gateway.state_store.fake import FakeStateStore


def _ctx(tmp_path: Path, store: FakeStateStore, *, dry_run: bool = False) -> JdkPulseContext:
    return JdkPulseContext.for_test(home_dir=tmp_path, state_store=store, dry_run=dry_run)


def test_clear_with_force(tmp_path: Path) -> None:
    store = FakeStateStore(home=str(tmp_path), path=tmp_path / ".jdk_current")

    result = CliRunner().invoke(cli, ["clear", "--force"], obj=_ctx(tmp_path, store))

    assert result.exit_code == 0
    assert "Selection cleared" in result.output
    assert store.clear_count == 1


def test_clear_asks_for_confirmation(tmp_path: Path) -> None:
    store = FakeStateStore(home=str(tmp_path), path=tmp_path / ".jdk_current")

    declined = CliRunner().invoke(cli, ["clear"], obj=_ctx(tmp_path, store), input="n\n")
    accepted = CliRunner().invoke(cli, ["clear"], obj=_ctx(tmp_path, store), input="y\n")

    assert declined.exit_code == 1
    assert accepted.exit_code == 0
    assert store.clear_count == 1


def test_clear_recovers_corrupt_state(tmp_path: Path) -> None:
    store = FakeStateStore(corrupt_reason="contains NUL bytes", path=tmp_path / ".jdk_current")

    result = CliRunner().invoke(cli, ["clear", "-f"], obj=_ctx(tmp_path, store))

    assert result.exit_code == 0
    assert store.read().home is None


def test_clear_dry_run(tmp_path: Path) -> None:
    store = FakeStateStore(home=str(tmp_path), path=tmp_path / ".jdk_current")

    result = CliRunner().invoke(cli, ["clear", "--dry-run"], obj=_ctx(tmp_path, store))

    assert result.exit_code == 0
    assert "[DRY RUN] Would remove" in result.output
    assert store.clear_count == 0
