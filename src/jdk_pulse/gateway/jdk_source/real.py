"""Production JDK discovery sources.

Sources are selected at runtime by ``default_sources()`` according to the
platform family; each one degrades to DiscoveryUnavailable instead of raising.
"""

import logging
import shutil
from collections.abc import Mapping
from pathlib import Path

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.discovery_parsing import (
    candidate_from_directory,
    parse_alternatives_listing,
    parse_java_home_listing,
)
from jdk_pulse.core.non_ideal_state import DiscoveryUnavailable
from jdk_pulse.core.platform import PlatformFamily, well_known_jdk_roots
from jdk_pulse.core.subprocess_utils import CompletedRun, run_bounded
from jdk_pulse.core.types import JdkCandidate
from jdk_pulse.gateway.jdk_source.abc import JdkSource

logger = logging.getLogger(__name__)

JAVA_HOME_TOOL = "/usr/libexec/java_home"


def resolve_jdk_home(directory: Path) -> Path | None:
    """Return the JDK home inside ``directory`` if it contains a java binary.

    Handles plain layouts (``bin/java``), macOS bundles
    (``Contents/Home/bin/java``) and Homebrew kegs
    (``libexec/openjdk.jdk/Contents/Home/bin/java``).
    """
    layouts = (
        directory,
        directory / "Contents" / "Home",
        directory / "libexec" / "openjdk.jdk" / "Contents" / "Home",
    )
    for home in layouts:
        bin_dir = home / "bin"
        try:
            if (bin_dir / "java").is_file() or (bin_dir / "java.exe").is_file():
                return home
        except OSError as e:
            logger.debug("Cannot inspect %s: %s", bin_dir, e)
    return None


class JavaHomeCommandSource(JdkSource):
    """macOS: ``/usr/libexec/java_home -V`` (the listing goes to stderr)."""

    def __init__(self, *, timeout: float) -> None:
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "java_home"

    def list_candidates(
        self, cancel: CancelToken | None
    ) -> list[JdkCandidate] | DiscoveryUnavailable:
        result = run_bounded([JAVA_HOME_TOOL, "-V"], timeout=self._timeout, cancel=cancel)
        if not isinstance(result, CompletedRun):
            return DiscoveryUnavailable(source=self.name, reason=result.message)
        if result.returncode != 0:
            if "Unable to find any JVMs" in result.stderr:
                return []
            return DiscoveryUnavailable(
                source=self.name, reason=f"java_home -V exited with status {result.returncode}"
            )
        return parse_java_home_listing(result.stderr or result.stdout)


class JenvSource(JdkSource):
    """JDKs registered with jenv under ``~/.jenv/versions``."""

    def __init__(self, *, home_dir: Path) -> None:
        self._versions_dir = home_dir / ".jenv" / "versions"

    @property
    def name(self) -> str:
        return "jenv"

    def list_candidates(
        self, cancel: CancelToken | None
    ) -> list[JdkCandidate] | DiscoveryUnavailable:
        if not self._versions_dir.is_dir():
            return []
        try:
            entries = sorted(self._versions_dir.iterdir())
        except OSError as e:
            return DiscoveryUnavailable(source=self.name, reason=str(e))

        candidates: list[JdkCandidate] = []
        seen_targets: set[Path] = set()
        for entry in entries:
            # jenv keeps several aliases (17, 17.0, openjdk64-17.0.9) for one JDK
            try:
                home = resolve_jdk_home(entry)
                if home is None:
                    continue
                target = home.resolve()
            except OSError as e:
                logger.debug("Skipping jenv entry %s: %s", entry, e)
                continue
            if target in seen_targets:
                continue
            seen_targets.add(target)
            # Resolved so the entry deduplicates against the system install it links to
            candidate = candidate_from_directory(target, source=self.name)
            if candidate is None:
                logger.debug("Skipping jenv entry without version: %s", entry)
                continue
            candidates.append(
                JdkCandidate(
                    home=candidate.home,
                    version_token=candidate.version_token,
                    vendor=candidate.vendor or "jenv",
                    source=self.name,
                )
            )
        return candidates


class DirectoryScanSource(JdkSource):
    """Scan fixed roots whose children are JDK installations."""

    def __init__(self, *, roots: list[Path]) -> None:
        self._roots = roots

    @property
    def name(self) -> str:
        return "directory"

    def list_candidates(
        self, cancel: CancelToken | None
    ) -> list[JdkCandidate] | DiscoveryUnavailable:
        candidates: list[JdkCandidate] = []
        seen_targets: set[Path] = set()
        for root in self._roots:
            if cancel is not None and cancel.cancelled:
                break
            try:
                entries = sorted(root.iterdir())
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.debug("Cannot list %s: %s", root, e)
                continue
            for entry in entries:
                try:
                    candidate = self._candidate(entry, seen_targets)
                except OSError as e:
                    logger.debug("Skipping %s: %s", entry, e)
                    continue
                if candidate is not None:
                    candidates.append(candidate)
        return candidates

    def _candidate(self, entry: Path, seen_targets: set[Path]) -> JdkCandidate | None:
        if not entry.is_dir():
            return None
        home = resolve_jdk_home(entry)
        if home is None:
            return None
        target = home.resolve()
        if target in seen_targets:
            return None
        seen_targets.add(target)
        # Homebrew's opt/ entries link into Cellar; report where they point
        if entry.is_symlink():
            home = target
        candidate = candidate_from_directory(home, source=self.name)
        if candidate is None:
            logger.debug("Skipping %s: no version information", home)
        return candidate


class AlternativesSource(JdkSource):
    """Linux: ``update-alternatives --list java`` (``alternatives`` on Fedora)."""

    def __init__(self, *, tool: str, timeout: float) -> None:
        self._tool = tool
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "alternatives"

    def list_candidates(
        self, cancel: CancelToken | None
    ) -> list[JdkCandidate] | DiscoveryUnavailable:
        result = run_bounded([self._tool, "--list", "java"], timeout=self._timeout, cancel=cancel)
        if not isinstance(result, CompletedRun):
            return DiscoveryUnavailable(source=self.name, reason=result.message)
        if result.returncode != 0:
            # No "java" alternative group registered
            return []
        return parse_alternatives_listing(result.stdout)


class WindowsRegistrySource(JdkSource):
    """Windows: JavaSoft registry hives under HKLM."""

    _KEYS = (
        r"SOFTWARE\JavaSoft\JDK",
        r"SOFTWARE\JavaSoft\Java Development Kit",
    )

    @property
    def name(self) -> str:
        return "windows-registry"

    def list_candidates(
        self, cancel: CancelToken | None
    ) -> list[JdkCandidate] | DiscoveryUnavailable:
        try:
            import winreg
        except ImportError:
            return DiscoveryUnavailable(source=self.name, reason="winreg not available")

        candidates: list[JdkCandidate] = []
        for key_path in self._KEYS:
            try:
                parent = winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, key_path)
            except OSError:
                continue
            with parent:
                index = 0
                while True:
                    try:
                        version = winreg.EnumKey(parent, index)
                    except OSError:
                        break
                    index += 1
                    try:
                        with winreg.OpenKey(parent, version) as sub:
                            home, _ = winreg.QueryValueEx(sub, "JavaHome")
                    except OSError:
                        logger.debug("No JavaHome under %s\\%s", key_path, version)
                        continue
                    candidates.append(
                        JdkCandidate(
                            home=str(home), version_token=version, vendor=None, source=self.name
                        )
                    )
        return candidates


class JavaHomeEnvSource(JdkSource):
    """The JAVA_HOME this process inherited, if it points at a JDK."""

    def __init__(self, *, environ: Mapping[str, str]) -> None:
        self._java_home = environ.get("JAVA_HOME")

    @property
    def name(self) -> str:
        return "java-home-env"

    def list_candidates(
        self, cancel: CancelToken | None
    ) -> list[JdkCandidate] | DiscoveryUnavailable:
        if not self._java_home:
            return []
        home = resolve_jdk_home(Path(self._java_home))
        if home is None:
            return []
        candidate = candidate_from_directory(home, source=self.name)
        return [candidate] if candidate is not None else []


def default_sources(
    platform: PlatformFamily,
    *,
    home_dir: Path,
    environ: Mapping[str, str],
    extra_dirs: list[Path],
    timeout: float,
) -> list[JdkSource]:
    """Build the discovery strategies for a platform, most authoritative first."""
    roots = well_known_jdk_roots(platform, home_dir=home_dir, environ=environ) + extra_dirs
    sources: list[JdkSource] = []
    if platform == "macos":
        sources.append(JavaHomeCommandSource(timeout=timeout))
    if platform == "windows":
        sources.append(WindowsRegistrySource())
    if platform == "linux":
        tool = shutil.which("update-alternatives") or shutil.which("alternatives")
        if tool is not None:
            sources.append(AlternativesSource(tool=tool, timeout=timeout))
    sources.append(DirectoryScanSource(roots=roots))
    if platform != "windows":
        sources.append(JenvSource(home_dir=home_dir))
    sources.append(JavaHomeEnvSource(environ=environ))
    return sources
