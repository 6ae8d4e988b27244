"""Tests for jdk-pulse config."""

from pathlib import Path

from click.testing import CliRunner

from jdk_pulse.cli.cli import cli
from jdk_pulse.core.config import GlobalConfig
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.gateway.config_store.fake import FakeConfigStore


def test_config_show_lists_keys(tmp_path: Path) -> None:
    ctx = JdkPulseContext.for_test(home_dir=tmp_path)

    result = CliRunner().invoke(cli, ["config", "show"], obj=ctx)

    assert result.exit_code == 0
    assert "Configuration (" in result.output
    assert "  probe_timeout=2" in result.output
    assert "  shells=bash" in result.output
    assert "  propagation=none" in result.output


def test_config_set_parses_list(tmp_path: Path) -> None:
    store = FakeConfigStore(config=GlobalConfig.default(tmp_path), home_dir=tmp_path)
    ctx = JdkPulseContext.for_test(home_dir=tmp_path, config_store=store)

    result = CliRunner().invoke(cli, ["config", "set", "external_tools", "docker,mvn"], obj=ctx)

    assert result.exit_code == 0
    assert "Set external_tools=docker,mvn" in result.output
    assert store.saved_values == [("external_tools", ["docker", "mvn"])]


def test_config_set_rejects_invalid_value(tmp_path: Path) -> None:
    store = FakeConfigStore(config=GlobalConfig.default(tmp_path), home_dir=tmp_path)
    ctx = JdkPulseContext.for_test(home_dir=tmp_path, config_store=store)

    result = CliRunner().invoke(cli, ["config", "set", "probe_timeout", "0"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: probe_timeout must be a positive number" in result.output
    assert store.saved_values == []


def test_config_set_rejects_unknown_key(tmp_path: Path) -> None:
    ctx = JdkPulseContext.for_test(home_dir=tmp_path)

    result = CliRunner().invoke(cli, ["config", "set", "colour", "blue"], obj=ctx)

    assert result.exit_code == 1
    assert "Invalid key: colour" in result.output
