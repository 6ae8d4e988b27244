"""Pure functions for the jdk-pulse block inside shell rc files.

The block is delimited by two marker lines. Everything outside the markers
belongs to the user and is reproduced byte for byte: content is handled as
``str`` decoded with ``surrogateescape`` so undecodable bytes survive a
round trip.
"""

from dataclasses import dataclass

BEGIN_MARKER = "# >>> jdk-pulse shell hook >>>"
END_MARKER = "# <<< jdk-pulse shell hook <<<"
HEADER_LINE = "# Managed by 'jdk-pulse shell install'; remove with 'jdk-pulse shell uninstall'."

# Recorded when install had to add a newline after the user's last line
ADDED_NEWLINE_FLAG = "# jdk-pulse: added newline before this block"


@dataclass(frozen=True)
class HookRegion:
    """A file split around its jdk-pulse block.

    ``prefix + region + suffix`` is always the original content.
    """

    prefix: str
    region: str
    suffix: str

    @property
    def added_newline(self) -> bool:
        return ADDED_NEWLINE_FLAG in _marker_lines(self.region)


@dataclass(frozen=True)
class MalformedRegion:
    reason: str


def _marker_lines(text: str) -> list[str]:
    return [line.rstrip("\r\n").strip() for line in text.splitlines(keepends=True)]


def split_hook_region(content: str) -> HookRegion | MalformedRegion | None:
    """Locate the jdk-pulse block.

    Returns:
        None if there is no block, HookRegion for exactly one well-ordered
        pair of markers, MalformedRegion otherwise

    Examples:
        >>> split_hook_region("export A=1\\n") is None
        True
        >>> split_hook_region(BEGIN_MARKER + "\\n")
        MalformedRegion(reason='begin marker without end marker')
    """
    lines = content.splitlines(keepends=True)
    stripped = [line.rstrip("\r\n").strip() for line in lines]
    begins = [i for i, line in enumerate(stripped) if line == BEGIN_MARKER]
    ends = [i for i, line in enumerate(stripped) if line == END_MARKER]

    if not begins and not ends:
        return None
    if len(begins) > 1 or len(ends) > 1:
        return MalformedRegion(
            reason=f"found {len(begins)} begin and {len(ends)} end markers"
        )
    if not ends:
        return MalformedRegion(reason="begin marker without end marker")
    if not begins:
        return MalformedRegion(reason="end marker without begin marker")
    begin, end = begins[0], ends[0]
    if end < begin:
        return MalformedRegion(reason="end marker appears before begin marker")

    return HookRegion(
        prefix="".join(lines[:begin]),
        region="".join(lines[begin : end + 1]),
        suffix="".join(lines[end + 1 :]),
    )


def render_block(snippet: str, *, added_newline: bool) -> str:
    """Wrap a shell snippet in the marker lines."""
    parts = [BEGIN_MARKER, HEADER_LINE]
    if added_newline:
        parts.append(ADDED_NEWLINE_FLAG)
    parts.append(snippet.rstrip("\n"))
    parts.append(END_MARKER)
    return "\n".join(parts) + "\n"


def install_block(content: str, snippet: str) -> str | MalformedRegion:
    """Return ``content`` with the block for ``snippet`` added or replaced.

    A new block is appended at the end of the file. When the file does not
    end with a newline, one is added and the fact is recorded inside the
    block so that ``remove_block`` can restore the original bytes.

    Examples:
        >>> once = install_block("alias ll='ls -l'", "true")
        >>> install_block(once, "true") == once
        True
        >>> remove_block(once)
        "alias ll='ls -l'"
    """
    found = split_hook_region(content)
    if isinstance(found, MalformedRegion):
        return found
    if found is None:
        if content == "" or content.endswith("\n"):
            return content + render_block(snippet, added_newline=False)
        return content + "\n" + render_block(snippet, added_newline=True)
    block = render_block(snippet, added_newline=found.added_newline)
    return found.prefix + block + found.suffix


def remove_block(content: str) -> str | MalformedRegion:
    """Return ``content`` without the jdk-pulse block (unchanged if absent)."""
    found = split_hook_region(content)
    if isinstance(found, MalformedRegion):
        return found
    if found is None:
        return content
    prefix = found.prefix
    if found.added_newline and found.suffix == "" and prefix.endswith("\n"):
        prefix = prefix[:-1]
    return prefix + found.suffix
