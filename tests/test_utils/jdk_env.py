"""Helpers that lay out fake JDK installations on disk for tests."""

from pathlib import Path

from jdk_pulse.core.types import JdkCandidate


def make_jdk_home(
    root: Path,
    name: str,
    *,
    version: str | None = None,
    vendor: str | None = None,
) -> Path:
    """Create ``root/name`` with ``bin/java`` and, optionally, a release file.

    Returns:
        The JDK home directory
    """
    home = root / name
    bin_dir = home / "bin"
    bin_dir.mkdir(parents=True)
    java = bin_dir / "java"
    java.write_text("#!/bin/sh\n", encoding="utf-8")
    java.chmod(0o755)
    if version is not None:
        lines = [f'JAVA_VERSION="{version}"']
        if vendor is not None:
            lines.append(f'IMPLEMENTOR="{vendor}"')
        (home / "release").write_text("\n".join(lines) + "\n", encoding="utf-8")
    return home


def candidate(
    home: Path | str, version: str, *, vendor: str | None = None, source: str = "fake"
) -> JdkCandidate:
    return JdkCandidate(home=str(home), version_token=version, vendor=vendor, source=source)
