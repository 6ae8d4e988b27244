"""Fake ToolLocator implementation for testing."""

from jdk_pulse.gateway.tool_locator.abc import ToolLocator


class FakeToolLocator(ToolLocator):
    """Resolves only the tools given at construction.

    Usage:
        locator = FakeToolLocator(tools={"docker": "/usr/local/bin/docker"})
    """

    def __init__(self, *, tools: dict[str, str] | None = None) -> None:
        self._tools = dict(tools) if tools is not None else {}

    def find(self, name: str) -> str | None:
        return self._tools.get(name)
