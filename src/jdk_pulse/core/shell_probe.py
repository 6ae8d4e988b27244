"""What a freshly started interactive shell reports about Java.

The doctor starts ``$SHELL -i -c <PROBE_SCRIPT>`` so that the user's rc
files (and the jdk-pulse hook in them) run exactly as they would in a new
terminal. Interactive rc files may print banners, so the interesting output
is fenced by marker lines.
"""

from dataclasses import dataclass

from jdk_pulse.core.versions import parse_java_version_output, parse_major_version

HOME_PREFIX = "__JDK_PULSE_HOME__="
JAVA_BEGIN = "__JDK_PULSE_JAVA_BEGIN__"
JAVA_END = "__JDK_PULSE_JAVA_END__"

# Valid in POSIX shells and in fish
PROBE_SCRIPT = (
    f"printf '%s\\n' \"{HOME_PREFIX}$JAVA_HOME\"; "
    f"printf '%s\\n' {JAVA_BEGIN}; "
    "java -version 2>&1; "
    f"printf '%s\\n' {JAVA_END}"
)


@dataclass(frozen=True)
class ShellSnapshot:
    """Java as seen by a new interactive shell.

    Attributes:
        shell: Shell executable that was probed
        java_home: ``$JAVA_HOME`` in that shell (None if unset or empty)
        java_version_output: Output of ``java -version`` (None if the probe
            never reached it)
    """

    shell: str
    java_home: str | None
    java_version_output: str | None

    @property
    def java_version(self) -> str | None:
        if self.java_version_output is None:
            return None
        return parse_java_version_output(self.java_version_output)

    @property
    def java_major(self) -> int | None:
        version = self.java_version
        if version is None:
            return None
        return parse_major_version(version)


def parse_probe_output(shell: str, stdout: str) -> ShellSnapshot | None:
    """Extract the probe results from a shell's stdout.

    Returns None when the home marker is missing, e.g. because an rc file
    exited early.

    Examples:
        >>> out = "banner\\n__JDK_PULSE_HOME__=/opt/jdk\\n__JDK_PULSE_JAVA_BEGIN__\\n"
        >>> out += 'openjdk version "21.0.1"\\n__JDK_PULSE_JAVA_END__\\n'
        >>> snap = parse_probe_output("/bin/bash", out)
        >>> (snap.java_home, snap.java_major)
        ('/opt/jdk', 21)
    """
    java_home: str | None = None
    found_home = False
    java_lines: list[str] | None = None
    java_output: str | None = None

    for line in stdout.splitlines():
        if java_lines is not None:
            if line == JAVA_END:
                java_output = "\n".join(java_lines)
                java_lines = None
                continue
            java_lines.append(line)
            continue
        if line.startswith(HOME_PREFIX):
            found_home = True
            java_home = line[len(HOME_PREFIX) :] or None
        elif line == JAVA_BEGIN:
            java_lines = []

    if not found_home:
        return None
    return ShellSnapshot(shell=shell, java_home=java_home, java_version_output=java_output)
