"""Abstract base class for locating external tools on PATH."""

from abc import ABC, abstractmethod


class ToolLocator(ABC):
    """Finds executables the way a shell would."""

    @abstractmethod
    def find(self, name: str) -> str | None:
        """Return the full path of ``name`` on PATH, or None if absent."""
        ...
