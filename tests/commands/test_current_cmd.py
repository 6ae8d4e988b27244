"""Tests for jdk-pulse current."""

import json
from pathlib import Path

from click.testing import CliRunner

from jdk_pulse.cli.cli import cli
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.gateway.jdk_source.fake import FakeJdkSource
from jdk_pulse.gateway.state_store.fake import FakeStateStore
from tests.test_utils.jdk_env import candidate, make_jdk_home


def test_current_prints_home_on_stdout(tmp_path: Path) -> None:
    home = make_jdk_home(tmp_path, "jdk-17")
    ctx = JdkPulseContext.for_test(
        home_dir=tmp_path,
        sources=[FakeJdkSource(candidates=[candidate(home, "17.0.9")])],
        state_store=FakeStateStore(home=str(home), path=tmp_path / ".jdk_current"),
    )

    result = CliRunner().invoke(cli, ["current"], obj=ctx)

    assert result.exit_code == 0
    assert result.stdout == f"{home}\n"
    assert "Java 17" in result.output


def test_current_json_for_unknown_home(tmp_path: Path) -> None:
    home = make_jdk_home(tmp_path, "hand-built")
    ctx = JdkPulseContext.for_test(
        home_dir=tmp_path,
        state_store=FakeStateStore(home=str(home), path=tmp_path / ".jdk_current"),
    )

    result = CliRunner().invoke(cli, ["current", "--json"], obj=ctx)

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["id"] == "unknown"
    assert payload["home"] == str(home)
    assert payload["known"] is False


def test_current_with_nothing_selected(tmp_path: Path) -> None:
    ctx = JdkPulseContext.for_test(home_dir=tmp_path)

    result = CliRunner().invoke(cli, ["current"], obj=ctx)
    as_json = CliRunner().invoke(cli, ["current", "--json"], obj=ctx)

    assert result.exit_code == 0
    assert "No JDK selected" in result.output
    assert json.loads(as_json.stdout) is None


def test_current_with_corrupt_state(tmp_path: Path) -> None:
    ctx = JdkPulseContext.for_test(
        home_dir=tmp_path,
        state_store=FakeStateStore(corrupt_reason="not valid UTF-8", path=tmp_path / "s"),
    )

    result = CliRunner().invoke(cli, ["current"], obj=ctx)

    assert result.exit_code == 1
    assert "is corrupt (not valid UTF-8)" in result.output
    assert "jdk-pulse clear" in result.output
