"""Pure parsers turning raw enumeration output into JDK candidates.

Each parser skips malformed entries individually so that one bad line never
drops the rest of the listing.
"""

import logging
from pathlib import Path

from jdk_pulse.core.types import JdkCandidate
from jdk_pulse.core.versions import (
    extract_quoted_segment,
    guess_vendor,
    parse_major_version,
    parse_release_file,
    version_token_from_name,
)

logger = logging.getLogger(__name__)


def parse_java_home_listing(output: str) -> list[JdkCandidate]:
    """Parse ``/usr/libexec/java_home -V`` output.

    Example line:
        21.0.1 (arm64) "Eclipse Adoptium" - "OpenJDK 21.0.1" /Library/.../Contents/Home
    """
    candidates: list[JdkCandidate] = []
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("Matching Java Virtual Machines"):
            continue
        parts = line.split()
        version_token = parts[0]
        if len(parts) < 2 or parse_major_version(version_token) is None:
            logger.debug("Skipping java_home line: %r", line)
            continue
        # Paths may contain spaces: take everything after the last quote
        last_quote = line.rfind('"')
        home = line[last_quote + 1 :].strip() if last_quote != -1 else parts[-1]
        if not home.startswith("/"):
            logger.debug("Skipping java_home line without a path: %r", line)
            continue
        candidates.append(
            JdkCandidate(
                home=home,
                version_token=version_token,
                vendor=extract_quoted_segment(line),
                source="java_home",
            )
        )
    return candidates


def parse_alternatives_listing(output: str) -> list[JdkCandidate]:
    """Parse ``update-alternatives --list java`` output (one java binary per line).

    The JDK home is the parent of ``bin``; Java 8 layouts put the binary in
    ``jre/bin``, in which case ``jre`` is stripped too.
    """
    candidates: list[JdkCandidate] = []
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        binary = Path(line)
        if binary.parent.name != "bin":
            logger.debug("Skipping alternatives entry: %r", line)
            continue
        home = binary.parent.parent
        if home.name == "jre":
            home = home.parent
        candidate = candidate_from_directory(home, source="alternatives")
        if candidate is None:
            logger.debug("Skipping alternatives entry without version: %r", line)
            continue
        candidates.append(candidate)
    return candidates


def candidate_from_directory(home: Path, *, source: str) -> JdkCandidate | None:
    """Build a candidate from a JDK directory.

    Version and vendor come from the ``release`` file when present, with the
    directory name as the fallback version token.

    Returns:
        JdkCandidate, or None if no version token can be found
    """
    version_token: str | None = None
    vendor: str | None = None
    release_path = home / "release"
    try:
        content: str | None = release_path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        content = None
    except OSError as e:
        logger.debug("Could not read %s: %s", release_path, e)
        content = None
    if content is not None:
        release = parse_release_file(content)
        version_token = release.get("JAVA_VERSION") or None
        vendor = release.get("IMPLEMENTOR") or None
    if version_token is None:
        # macOS bundles: foo.jdk/Contents/Home carries the version on foo.jdk
        name = home.parent.parent.name if home.name == "Home" else home.name
        version_token = version_token_from_name(name)
    if version_token is None:
        return None
    if vendor is None:
        vendor = guess_vendor(str(home))
    return JdkCandidate(home=str(home), version_token=version_token, vendor=vendor, source=source)
