"""Errors raised while parsing version ranges and problems collected during validation."""

from __future__ import annotations

from dataclasses import dataclass

from .models import LibDefIdentity, Version


class VersionParseError(ValueError):
    """Base error for a version string that cannot be parsed."""

    def __init__(self, text: str, message: str) -> None:
        super().__init__(message)
        self.text = text


class MalformedVersionError(VersionParseError):
    """Raised when the text does not match the version grammar at all."""

    def __init__(self, text: str, expected: str) -> None:
        super().__init__(
            text,
            f"{text} is a malformed version string. "
            f"Expected a version formatted as `{expected}`",
        )
        self.expected = expected


class InvalidRangeOperatorError(VersionParseError):
    """Raised when a range token other than '>=' or '<=' is present."""

    def __init__(self, text: str, operator: str, upper_bound: bool = False) -> None:
        kind = "upper-bound range" if upper_bound else "range"
        super().__init__(text, f"'{text}': Invalid version {kind}: {operator}")
        self.operator = operator
        self.upper_bound = upper_bound


class InvalidNumberError(VersionParseError):
    """Raised when a version component is not a decimal integer."""

    def __init__(self, text: str, component: str) -> None:
        super().__init__(text, f"{text}: Invalid {component} number. Expected a number.")
        self.component = component


class NonsensicalRangeError(VersionParseError):
    """Raised for ``<=v0.0.0``, a constraint that admits nothing useful."""

    def __init__(self, text: str) -> None:
        super().__init__(text, f"It doesn't make sense to have a version range of '{text}'!")


@dataclass(frozen=True)
class OverlapValidationError:
    """Two ranges of the same definition that some concrete version satisfies.

    Collected by validation, never raised.
    """

    identity: LibDefIdentity
    first: Version
    second: Version

    def __str__(self) -> str:
        return (
            f"Overlapping runtime version ranges: '{self.first}' and "
            f"'{self.second}' both match at least one version"
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "kind": "overlap",
            "identity": str(self.identity),
            "first": str(self.first),
            "second": str(self.second),
            "message": str(self),
        }
