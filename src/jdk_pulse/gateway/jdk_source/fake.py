"""Fake JdkSource implementation for testing.

FakeJdkSource returns pre-configured candidates (or a configured
DiscoveryUnavailable) without touching the OS.
"""

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.non_ideal_state import DiscoveryUnavailable
from jdk_pulse.core.types import JdkCandidate
from jdk_pulse.gateway.jdk_source.abc import JdkSource


class FakeJdkSource(JdkSource):
    """In-memory fake that returns configured candidates.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(
        self,
        *,
        name: str = "fake",
        candidates: list[JdkCandidate] | None = None,
        unavailable_reason: str | None = None,
    ) -> None:
        """Create FakeJdkSource.

        Args:
            name: Source name
            candidates: Candidates to return
            unavailable_reason: If set, list_candidates returns DiscoveryUnavailable
        """
        self._name = name
        self._candidates = list(candidates) if candidates is not None else []
        self._unavailable_reason = unavailable_reason
        self._call_count = 0

    @property
    def call_count(self) -> int:
        """Number of list_candidates calls. For test assertions only."""
        return self._call_count

    @property
    def name(self) -> str:
        return self._name

    def list_candidates(
        self, cancel: CancelToken | None
    ) -> list[JdkCandidate] | DiscoveryUnavailable:
        self._call_count += 1
        if self._unavailable_reason is not None:
            return DiscoveryUnavailable(source=self._name, reason=self._unavailable_reason)
        return list(self._candidates)
