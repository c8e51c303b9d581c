"""Definition identity and version range models."""

from __future__ import annotations

from dataclasses import dataclass

from .version import Version


@dataclass(frozen=True, slots=True)
class LibDefIdentity:
    """The owning definition: package name plus package version string."""

    pkg_name: str
    pkg_version: str

    def __post_init__(self) -> None:
        if not self.pkg_name:
            raise ValueError("Package name must be non-empty")
        if not self.pkg_version:
            raise ValueError("Package version must be non-empty")

    def __str__(self) -> str:
        return f"{self.pkg_name}@{self.pkg_version}"


@dataclass(frozen=True, slots=True)
class LibDefRange:
    """A runtime version range supported by one definition."""

    identity: LibDefIdentity
    version: Version

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.identity.pkg_name,
            "version": self.identity.pkg_version,
            "range": str(self.version),
        }

    @classmethod
    def from_strings(cls, pkg_name: str, pkg_version: str, range_text: str) -> LibDefRange:
        from ..parsers.version import parse_version

        return cls(
            identity=LibDefIdentity(pkg_name=pkg_name, pkg_version=pkg_version),
            version=parse_version(range_text),
        )
