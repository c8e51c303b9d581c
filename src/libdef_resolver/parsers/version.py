"""Parse and format runtime version range strings.

Grammar (definition directories are named after it, so it must stay stable):

    [range] "v" MAJOR "." (MINOR | "x") "." (PATCH | "x") ["_" range "v" ...]

where ``range`` is ``>=`` or ``<=`` and may be omitted on the first part for an
exact version. The optional ``_`` suffix is the upper bound.
"""

from __future__ import annotations

import re

from ..errors import (
    InvalidNumberError,
    InvalidRangeOperatorError,
    MalformedVersionError,
    NonsensicalRangeError,
)
from ..models import EXACT, GTE, LTE, WILDCARD, Component, Concrete, Version

DEFAULT_DIRECTORY_PREFIX = "flow_"

_PART = r"v([^._\s]+)\.([^._\s]+)\.([^._\s]+)"
VERSION_RE = re.compile(rf"^([<>]=?)?{_PART}(?:_([<>]=?){_PART})?$")
TARGET_RE = re.compile(r"^v?([^._\s]+)\.([^._\s]+)\.([^._\s]+)$")

_VALID_OPERATORS = {GTE, LTE}


def _parse_number(text: str, name: str, raw: str) -> Concrete:
    if not (raw.isascii() and raw.isdigit()):
        raise InvalidNumberError(text, name)
    return Concrete(int(raw, 10))


def _parse_component(text: str, name: str, raw: str) -> Component:
    if raw == "x":
        return WILDCARD
    return _parse_number(text, name, raw)


def _build(text: str, range_: str, parts: tuple[str, str, str], label: str = "") -> Version:
    major, minor, patch = parts
    return Version(
        range=range_,
        major=_parse_number(text, f"{label}major", major),
        minor=_parse_component(text, f"{label}minor", minor),
        patch=_parse_component(text, f"{label}patch", patch),
    )


def parse_version(text: str) -> Version:
    """Parse ``text`` into a ``Version``.

    Raises:
        MalformedVersionError: the text does not match the grammar.
        InvalidRangeOperatorError: a range token is neither '>=' nor '<='.
        InvalidNumberError: a component is not a decimal integer.
        NonsensicalRangeError: the text is an unbounded '<=v0.0.0'.
    """
    match = VERSION_RE.fullmatch(text)
    if match is None:
        raise MalformedVersionError(text, VERSION_RE.pattern)

    range_, major, minor, patch, up_range, up_major, up_minor, up_patch = match.groups()
    if range_ is not None and range_ not in _VALID_OPERATORS:
        raise InvalidRangeOperatorError(text, range_)
    if up_range is not None and up_range not in _VALID_OPERATORS:
        raise InvalidRangeOperatorError(text, up_range, upper_bound=True)

    lower = _build(text, range_ or EXACT, (major, minor, patch))

    if up_major is None:
        if lower.range == LTE and lower.components == (Concrete(0), Concrete(0), Concrete(0)):
            raise NonsensicalRangeError(text)
        return lower

    upper = _build(text, up_range, (up_major, up_minor, up_patch), label="upper-bound ")
    if lower.range == EXACT:
        # An exact lower bound cannot be paired with an upper bound.
        raise MalformedVersionError(text, VERSION_RE.pattern)
    return Version(
        range=lower.range,
        major=lower.major,
        minor=lower.minor,
        patch=lower.patch,
        upper_bound=upper,
    )


def format_version(version: Version) -> str:
    """Render ``version`` in the canonical grammar; inverse of ``parse_version``."""
    text = f"{version.range}v{version.major}.{version.minor}.{version.patch}"
    if version.upper_bound is not None:
        text += f"_{format_version(version.upper_bound)}"
    return text


def parse_directory_name(name: str, prefix: str = DEFAULT_DIRECTORY_PREFIX) -> Version:
    """Parse a definition directory name such as ``flow_>=v0.38.x_<=v0.46.x``."""
    if prefix:
        if not name.startswith(prefix):
            raise MalformedVersionError(name, prefix + VERSION_RE.pattern)
        name = name[len(prefix):]
    return parse_version(name)


def parse_target(text: str) -> Version:
    """Parse a target version given as ``0.40.0``, ``v0.40.0`` or ``0.40.x``."""
    match = TARGET_RE.fullmatch(text.strip())
    if match is None:
        raise MalformedVersionError(text, TARGET_RE.pattern)
    return _build(text, EXACT, match.groups())
