"""Abstract base class for JDK discovery sources.

A JdkSource is one platform-specific way of enumerating installed JDKs
(an OS command, a directory scan, a registry hive). Sources report raw
candidates; validation and deduplication happen in the registry.
"""

from abc import ABC, abstractmethod

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.non_ideal_state import DiscoveryUnavailable
from jdk_pulse.core.types import JdkCandidate


class JdkSource(ABC):
    """Abstract interface for one JDK enumeration strategy."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier recorded on every candidate (e.g. "java_home")."""
        ...

    @abstractmethod
    def list_candidates(
        self, cancel: CancelToken | None
    ) -> list[JdkCandidate] | DiscoveryUnavailable:
        """Enumerate candidates.

        Malformed individual entries are skipped by the source; only a
        failure of the whole source is reported as DiscoveryUnavailable.

        Args:
            cancel: Optional token that aborts subprocess-based enumeration

        Returns:
            Candidate list (possibly empty) or DiscoveryUnavailable
        """
        ...
