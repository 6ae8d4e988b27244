"""JDK registry: enumerate, validate, normalize and deduplicate installations.

Discovery never raises. Each source either yields candidates or reports
DiscoveryUnavailable, which is logged and kept as a note on the snapshot.

Tie-break policy: two records that share vendor and full version but live in
different homes are both kept. The one under the earliest well-known install
root sorts first (and wins ``select_by_major``); every id embeds a short hash
of its normalized home, so ids never collide and only change when the
installation moves.
"""

import hashlib
import logging
import re
from dataclasses import dataclass
from pathlib import Path, PurePath

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.non_ideal_state import DiscoveryUnavailable
from jdk_pulse.core.platform import normalize_home
from jdk_pulse.core.types import JdkCandidate, JdkRecord
from jdk_pulse.core.versions import parse_major_version
from jdk_pulse.gateway.jdk_source.abc import JdkSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoverySnapshot:
    """Result of one discovery run."""

    records: tuple[JdkRecord, ...]
    notes: tuple[DiscoveryUnavailable, ...]

    def find_by_id(self, jdk_id: str) -> JdkRecord | None:
        for record in self.records:
            if record.id == jdk_id:
                return record
        return None

    def find_by_home(self, home: str) -> JdkRecord | None:
        key = normalize_home(home)
        for record in self.records:
            if normalize_home(record.home) == key:
                return record
        return None

    def select_by_major(self, major: int) -> JdkRecord | None:
        """Newest record of a major version; preferred install root on ties."""
        matching = [r for r in self.records if r.version_major == major]
        if not matching:
            return None
        newest = max(_version_key(r.version_full) for r in matching)
        # records are already ordered by preference within equal versions
        for record in matching:
            if _version_key(record.version_full) == newest:
                return record
        return None

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(r.id for r in self.records)


class JdkRegistry:
    """Enumerates JDKs from a set of platform-specific sources."""

    def __init__(self, sources: list[JdkSource], *, preferred_roots: list[Path]) -> None:
        """Create a registry.

        Args:
            sources: Discovery strategies, most authoritative first
            preferred_roots: Install roots in tie-break preference order
        """
        self._sources = sources
        self._preferred_roots = preferred_roots

    def discover(self, cancel: CancelToken | None = None) -> tuple[JdkRecord, ...]:
        return self.discover_snapshot(cancel).records

    def discover_snapshot(self, cancel: CancelToken | None = None) -> DiscoverySnapshot:
        notes: list[DiscoveryUnavailable] = []
        by_home: dict[str, JdkCandidate] = {}
        majors: dict[str, int] = {}

        for source in self._sources:
            if cancel is not None and cancel.cancelled:
                notes.append(DiscoveryUnavailable(source=source.name, reason="cancelled"))
                continue
            try:
                result = source.list_candidates(cancel)
            except OSError as e:
                result = DiscoveryUnavailable(source=source.name, reason=str(e))
            if isinstance(result, DiscoveryUnavailable):
                logger.warning("%s", result.message)
                notes.append(result)
                continue
            logger.debug("Source %s reported %d candidate(s)", source.name, len(result))
            for candidate in result:
                major = _validate(candidate)
                if major is None:
                    continue
                key = normalize_home(candidate.home)
                existing = by_home.get(key)
                if existing is None or (not existing.vendor and candidate.vendor):
                    by_home[key] = candidate
                    majors[key] = major

        ordered = sorted(
            by_home.items(),
            key=lambda item: (
                majors[item[0]],
                _version_key(item[1].version_token),
                self._root_rank(item[1].home),
                item[0],
            ),
        )
        records = tuple(_to_record(candidate, majors[key]) for key, candidate in ordered)
        logger.debug("Discovered %d JDK(s)", len(records))
        return DiscoverySnapshot(records=records, notes=tuple(notes))

    def _root_rank(self, home: str) -> int:
        key = normalize_home(home)
        for rank, root in enumerate(self._preferred_roots):
            root_key = normalize_home(str(root))
            if key.startswith(root_key + "/") or key.startswith(root_key + "\\"):
                return rank
        return len(self._preferred_roots)


def _validate(candidate: JdkCandidate) -> int | None:
    """Return the major version if the candidate is usable, else None."""
    major = parse_major_version(candidate.version_token)
    if major is None:
        logger.debug(
            "Skipping %s from %s: unparseable version %r",
            candidate.home,
            candidate.source,
            candidate.version_token,
        )
        return None
    if not _is_absolute(candidate.home):
        logger.debug("Skipping relative home %r from %s", candidate.home, candidate.source)
        return None
    try:
        is_dir = Path(candidate.home).is_dir()
    except OSError as e:
        logger.debug("Skipping %s from %s: %s", candidate.home, candidate.source, e)
        return None
    if not is_dir:
        logger.debug("Skipping %s from %s: not a directory", candidate.home, candidate.source)
        return None
    return major


def _is_absolute(home: str) -> bool:
    return PurePath(home).is_absolute() or re.match(r"^[A-Za-z]:[\\/]", home) is not None


def _to_record(candidate: JdkCandidate, major: int) -> JdkRecord:
    return JdkRecord(
        id=make_jdk_id(candidate.vendor, candidate.version_token, candidate.home),
        version_major=major,
        version_full=candidate.version_token,
        home=candidate.home.rstrip("/\\") or candidate.home,
        vendor=candidate.vendor,
        source=candidate.source,
    )


def make_jdk_id(vendor: str | None, version_full: str, home: str) -> str:
    """Stable id from vendor, version and home, e.g. "eclipse-adoptium-21.0.1-3f9a2c".

    Examples:
        >>> make_jdk_id("Eclipse Adoptium", "21.0.1", "/opt/jdk").startswith(
        ...     "eclipse-adoptium-21.0.1-"
        ... )
        True
    """
    vendor_slug = re.sub(r"[^a-z0-9]+", "-", (vendor or "jdk").lower()).strip("-") or "jdk"
    version_slug = re.sub(r"[^A-Za-z0-9._]+", "_", version_full)
    digest = hashlib.sha1(normalize_home(home).encode("utf-8")).hexdigest()[:6]
    return f"{vendor_slug}-{version_slug}-{digest}"


def _version_key(version: str) -> tuple[int, ...]:
    return tuple(int(part) for part in re.findall(r"\d+", version))
