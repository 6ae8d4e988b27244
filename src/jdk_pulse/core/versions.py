"""Version-string normalization for JDK discovery and probes."""

import re

_LEADING_NUMBER = re.compile(r"^\s*v?(\d+)")
_LEGACY_VERSION = re.compile(r"^\s*1\.(\d+)")
_DIR_VERSION = re.compile(r"(?<![\d.])(1\.\d+(?:\.\d+)?(?:_\d+)?|\d{1,2}(?:\.\d+){0,3})(?![\d])")
_JAVA_VERSION_LINE = re.compile(r'version\s+"([^"]+)"')


def parse_major_version(version: str) -> int | None:
    """Return the major Java version for a version token.

    Legacy "1.x" strings map to x; modern strings use the first numeric
    component.

    Examples:
        >>> parse_major_version("1.8.0_302")
        8
        >>> parse_major_version("21.0.10")
        21
        >>> parse_major_version("temurin") is None
        True
    """
    legacy = _LEGACY_VERSION.match(version)
    if legacy is not None:
        major = int(legacy.group(1))
    else:
        leading = _LEADING_NUMBER.match(version)
        if leading is None:
            return None
        major = int(leading.group(1))
    if major <= 0:
        return None
    return major


def version_token_from_name(name: str) -> str | None:
    """Find a version token inside a directory name.

    Examples:
        >>> version_token_from_name("temurin-17.0.9+9")
        '17.0.9'
        >>> version_token_from_name("java-1.8.0-openjdk-amd64")
        '1.8.0'
        >>> version_token_from_name("openjdk64-21.0.10")
        '21.0.10'
        >>> version_token_from_name("default-java") is None
        True
    """
    # "openjdk64" would otherwise be read as version 64
    cleaned = re.sub(r"(?i)(x86_|amd|arm|aarch|openjdk|jdk|x)64", "", name)
    match = _DIR_VERSION.search(cleaned)
    if match is None:
        return None
    return match.group(1)


def extract_quoted_segment(line: str) -> str | None:
    """Return the first double-quoted segment of a line, if any."""
    match = re.search(r'"([^"]*)"', line)
    if match is None:
        return None
    return match.group(1) or None


def parse_release_file(content: str) -> dict[str, str]:
    """Parse a JDK ``release`` file (KEY="value" lines) into a dict."""
    values: dict[str, str] = {}
    for line in content.splitlines():
        key, sep, raw = line.partition("=")
        if not sep:
            continue
        values[key.strip()] = raw.strip().strip('"')
    return values


def parse_java_version_output(output: str) -> str | None:
    """Extract the version string from ``java -version`` output.

    Examples:
        >>> parse_java_version_output('openjdk version "21.0.1" 2023-10-17')
        '21.0.1'
        >>> parse_java_version_output('java version "1.8.0_302"')
        '1.8.0_302'
    """
    for line in output.splitlines():
        match = _JAVA_VERSION_LINE.search(line)
        if match is not None:
            return match.group(1)
    return None


def guess_vendor(path: str) -> str | None:
    """Guess the JDK vendor from its installation path."""
    path_lower = path.lower()
    for needle, vendor in _PATH_VENDORS:
        if needle in path_lower:
            return vendor
    return None


_PATH_VENDORS: tuple[tuple[str, str], ...] = (
    ("temurin", "Eclipse Adoptium"),
    ("adoptium", "Eclipse Adoptium"),
    ("adoptopenjdk", "AdoptOpenJDK"),
    ("zulu", "Azul Zulu"),
    ("corretto", "Amazon Corretto"),
    ("graalvm", "GraalVM"),
    ("liberica", "BellSoft Liberica"),
    ("bellsoft", "BellSoft Liberica"),
    ("microsoft", "Microsoft"),
    ("semeru", "IBM Semeru"),
    ("sapmachine", "SAP SapMachine"),
    ("oracle", "Oracle"),
)
