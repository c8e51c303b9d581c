"""Wildcard-aware range satisfaction.

``satisfies`` works like a semver ``satisfies`` check except that the version
operand may contain ``x`` components. Each wildcard is expanded to the digits
0 through 9 only, so a component of 10 or more hidden behind a wildcard is
never tried: ``v0.x.0`` does not satisfy ``>=0.10.0``. The expansion is
bounded at 1000 leaf checks.
"""

from __future__ import annotations

from collections.abc import Callable

from .models import GTE, Version, Wildcard
from .parsers import semver

LeafCheck = Callable[[str, str], bool]

WILDCARD_DIGITS = range(10)
_EXPANSION_ORDER = ("major", "minor", "patch")


def satisfies(pattern: Version, range_text: str, *, leaf: LeafCheck = semver.satisfies) -> bool:
    """Return True if some expansion of ``pattern`` satisfies ``range_text``.

    Only the components of ``pattern`` are considered; its range and upper
    bound are ignored.
    """
    if all(isinstance(c, Wildcard) for c in pattern.components):
        return True

    for name in _EXPANSION_ORDER:
        if isinstance(getattr(pattern, name), Wildcard):
            return any(
                satisfies(pattern.replace_component(name, digit), range_text, leaf=leaf)
                for digit in WILDCARD_DIGITS
            )

    return leaf(_plain(pattern), range_text)


def _plain(version: Version) -> str:
    return f"{version.major}.{version.minor}.{version.patch}"


def _comparator(version: Version) -> str:
    return f"{version.range}{version.major}.{version.minor}.{version.patch}"


def to_range_string(version: Version) -> str:
    """Render ``version`` as a range string for the semver evaluator.

    Exact versions render as plain or x-ranges (``0.40.x``). A bounded version
    with a ``>=`` lower bound is the intersection of both bounds; with a
    ``<=`` lower bound it is their union.
    """
    if version.upper_bound is None:
        return _comparator(version)
    lower = _comparator(version.lower)
    upper = _comparator(version.upper_bound)
    if version.range == GTE:
        return f"{lower} {upper}"
    return f"{lower} || {upper}"
