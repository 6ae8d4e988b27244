"""Value types shared across jdk-pulse components."""

from dataclasses import dataclass
from typing import Any, Literal

ShellKind = Literal["bash", "zsh", "fish"]
SUPPORTED_SHELLS: tuple[ShellKind, ...] = ("bash", "zsh", "fish")

HookStatus = Literal["installed", "not-installed", "malformed", "unreadable"]


@dataclass(frozen=True)
class JdkCandidate:
    """Raw entry produced by a discovery source, before validation.

    Attributes:
        home: Path as reported by the source (may not exist)
        version_token: Version string as reported (e.g. "1.8.0_302", "21.0.1")
        vendor: Vendor name if the source knows it
        source: Name of the source that produced the entry
    """

    home: str
    version_token: str
    vendor: str | None
    source: str


@dataclass(frozen=True)
class JdkRecord:
    """A validated, discovered JDK installation."""

    id: str
    version_major: int
    version_full: str
    home: str
    vendor: str | None
    source: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "version_major": self.version_major,
            "version_full": self.version_full,
            "home": self.home,
            "vendor": self.vendor,
            "source": self.source,
        }

    @property
    def label(self) -> str:
        """Human label, e.g. "Java 21 (Eclipse Adoptium)"."""
        if self.vendor == "jenv":
            return f"{self.version_full} (jenv)"
        if self.vendor:
            return f"Java {self.version_major} ({self.vendor})"
        return f"Java {self.version_major}"


@dataclass(frozen=True)
class ActiveSelection:
    """Canonical state: the home of the selected JDK, or None."""

    home: str | None

    @property
    def is_selected(self) -> bool:
        return self.home is not None

    @staticmethod
    def none() -> "ActiveSelection":
        return ActiveSelection(home=None)


@dataclass(frozen=True)
class ActiveJdk:
    """The selected JDK resolved against the registry.

    Attributes:
        record: Matching discovered record, or a minimal record with id
            "unknown" when the home is not among the discovered JDKs
        known: Whether the home matched a discovered JDK
    """

    record: JdkRecord
    known: bool

    @staticmethod
    def unknown(home: str) -> "ActiveJdk":
        return ActiveJdk(
            record=JdkRecord(
                id="unknown",
                version_major=0,
                version_full="unknown",
                home=home,
                vendor=None,
                source="state-file",
            ),
            known=False,
        )
