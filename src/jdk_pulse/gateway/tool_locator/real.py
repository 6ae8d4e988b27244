"""Real ToolLocator implementation using shutil.which."""

import shutil

from jdk_pulse.gateway.tool_locator.abc import ToolLocator


class RealToolLocator(ToolLocator):
    def find(self, name: str) -> str | None:
        return shutil.which(name)
