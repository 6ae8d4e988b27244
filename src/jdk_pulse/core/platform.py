"""Platform detection and well-known JDK install locations."""

import sys
from collections.abc import Mapping
from pathlib import Path, PureWindowsPath
from typing import Literal

PlatformFamily = Literal["macos", "linux", "windows"]


def detect_platform() -> PlatformFamily:
    if sys.platform == "darwin":
        return "macos"
    if sys.platform == "win32":
        return "windows"
    return "linux"


def well_known_jdk_roots(
    platform: PlatformFamily, *, home_dir: Path, environ: Mapping[str, str]
) -> list[Path]:
    """Directories whose children are JDK installations, most preferred first.

    The order doubles as the tie-break preference between two JDKs that
    report the same vendor and version.
    """
    if platform == "macos":
        return [
            Path("/Library/Java/JavaVirtualMachines"),
            home_dir / "Library" / "Java" / "JavaVirtualMachines",
            Path("/opt/homebrew/opt"),
            Path("/usr/local/opt"),
            home_dir / ".sdkman" / "candidates" / "java",
            home_dir / ".asdf" / "installs" / "java",
            home_dir / ".jdks",
        ]
    if platform == "windows":
        program_files = environ.get("ProgramFiles", r"C:\Program Files")
        program_files_x86 = environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")
        vendor_dirs = (
            "Java",
            "Eclipse Adoptium",
            "Eclipse Foundation",
            "AdoptOpenJDK",
            "Microsoft",
            "Zulu",
            "Amazon Corretto",
            "BellSoft",
        )
        roots = [Path(PureWindowsPath(program_files, name)) for name in vendor_dirs]
        roots.append(Path(PureWindowsPath(program_files_x86, "Java")))
        roots.append(home_dir / ".jdks")
        return roots
    return [
        Path("/usr/lib/jvm"),
        Path("/usr/java"),
        Path("/opt/java"),
        home_dir / ".sdkman" / "candidates" / "java",
        home_dir / ".asdf" / "installs" / "java",
        home_dir / ".jdks",
    ]


def normalize_home(home: str) -> str:
    """Comparison key for JDK homes: trailing separators dropped, case folded."""
    stripped = home.rstrip("/\\") or home
    return stripped.casefold()
