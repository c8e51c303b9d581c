"""npm-style semver range handling built atop packaging.version.

Supported expressions:
- exact versions (e.g., "1.2.3") and x-ranges ("1.2.x", "1.x", "*", "")
- comparators >=, <=, >, <, = with full or partial versions (">=0.2.x")
- caret ranges ^x.y.z and tilde ranges ~x.y.z, with npm's 0.x rules
- hyphen ranges "1.2.3 - 2.3.4"
- space separated comparator sets (intersection), e.g. ">=1.0.0 <2.0.0"
- "||" separated alternatives (union)

A range is read into a tuple of ``Interval`` values; ``satisfies`` checks
membership and ``intersects`` checks whether two ranges share a version.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from packaging.version import InvalidVersion, Version

_PARTIAL_RE = re.compile(
    r"^v?(\d+|[xX*])(?:\.(\d+|[xX*]))?(?:\.(\d+|[xX*]))?"
    r"(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)
_HYPHEN_RE = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_OPERATOR_SPACE_RE = re.compile(r"(>=|<=|>|<|=|\^|~>?)\s+")
_COMPARATOR_RE = re.compile(r"^(>=|<=|>|<|=|\^|~>?)?(.*)$")

_ZERO = Version("0.0.0")


class RangeSyntaxError(ValueError):
    """Raised when a version or range string cannot be read."""


def _parse_version(v: str) -> Version:
    try:
        return Version(v)
    except InvalidVersion as exc:
        raise RangeSyntaxError(f"Invalid version: {v!r}") from exc


def _next_major(major: int) -> Version:
    return Version(f"{major + 1}.0.0")


def _next_minor(major: int, minor: int) -> Version:
    return Version(f"{major}.{minor + 1}.0")


def _next_patch(major: int, minor: int, patch: int) -> Version:
    return Version(f"{major}.{minor}.{patch + 1}")


@dataclass(frozen=True, slots=True)
class Interval:
    """A contiguous span of versions; ``upper=None`` means unbounded."""

    lower: Version
    upper: Version | None
    lower_inclusive: bool = True
    upper_inclusive: bool = False

    @property
    def empty(self) -> bool:
        if self.upper is None:
            return False
        if self.lower < self.upper:
            return False
        return not (self.lower == self.upper and self.lower_inclusive and self.upper_inclusive)

    def contains(self, v: Version) -> bool:
        if v < self.lower or (v == self.lower and not self.lower_inclusive):
            return False
        if self.upper is None:
            return True
        return v < self.upper or (v == self.upper and self.upper_inclusive)

    def intersect(self, other: Interval) -> Interval:
        if self.lower > other.lower:
            lower, lower_inclusive = self.lower, self.lower_inclusive
        elif self.lower < other.lower:
            lower, lower_inclusive = other.lower, other.lower_inclusive
        else:
            lower = self.lower
            lower_inclusive = self.lower_inclusive and other.lower_inclusive

        if other.upper is None or (self.upper is not None and self.upper < other.upper):
            upper, upper_inclusive = self.upper, self.upper_inclusive
        elif self.upper is None or self.upper > other.upper:
            upper, upper_inclusive = other.upper, other.upper_inclusive
        else:
            upper = self.upper
            upper_inclusive = self.upper_inclusive and other.upper_inclusive

        return Interval(lower, upper, lower_inclusive, upper_inclusive)


_ANY = Interval(_ZERO, None)
_NOTHING = Interval(_ZERO, _ZERO)


@dataclass(frozen=True, slots=True)
class _Partial:
    """A possibly incomplete version: missing or wildcard parts are None."""

    major: int | None
    minor: int | None
    patch: int | None
    exact: Version | None

    @property
    def floor(self) -> Version:
        if self.exact is not None:
            return self.exact
        return Version(f"{self.major or 0}.{self.minor or 0}.{self.patch or 0}")

    @property
    def ceiling(self) -> Version | None:
        """First version past everything the partial matches (exclusive)."""
        if self.major is None:
            return None
        if self.minor is None:
            return _next_major(self.major)
        if self.patch is None:
            return _next_minor(self.major, self.minor)
        return _next_patch(self.major, self.minor, self.patch)


def _parse_partial(text: str) -> _Partial:
    match = _PARTIAL_RE.match(text)
    if match is None:
        raise RangeSyntaxError(f"Invalid version in range: {text!r}")
    parts: list[int | None] = []
    wildcard = False
    for raw in match.group(1, 2, 3):
        # Anything after the first wildcard is a wildcard too ("1.x.3" is "1.x").
        if wildcard or raw is None or raw in {"x", "X", "*"}:
            wildcard = True
            parts.append(None)
        else:
            parts.append(int(raw))
    major, minor, patch = parts
    exact = None
    if patch is not None:
        pre = match.group(4)
        exact = _parse_version(f"{major}.{minor}.{patch}" + (f"-{pre}" if pre else ""))
    return _Partial(major, minor, patch, exact)


def _caret(p: _Partial) -> Interval:
    if p.major is None:
        return _ANY
    if p.major > 0 or p.minor is None:
        return Interval(p.floor, _next_major(p.major))
    if p.minor > 0 or p.patch is None:
        return Interval(p.floor, _next_minor(p.major, p.minor))
    return Interval(p.floor, _next_patch(p.major, p.minor, p.patch))


def _tilde(p: _Partial) -> Interval:
    if p.major is None:
        return _ANY
    if p.minor is None:
        return Interval(p.floor, _next_major(p.major))
    return Interval(p.floor, _next_minor(p.major, p.minor))


def _comparator(token: str) -> Interval:
    match = _COMPARATOR_RE.match(token)
    assert match is not None
    op, rest = match.group(1) or "", match.group(2)
    p = _parse_partial(rest)

    if op == "^":
        return _caret(p)
    if op.startswith("~"):
        return _tilde(p)
    if op == ">=":
        return Interval(p.floor, None)
    if op == ">":
        if p.exact is not None:
            return Interval(p.exact, None, lower_inclusive=False)
        ceiling = p.ceiling
        return _NOTHING if ceiling is None else Interval(ceiling, None)
    if op == "<=":
        if p.exact is not None:
            return Interval(_ZERO, p.exact, upper_inclusive=True)
        return Interval(_ZERO, p.ceiling)
    if op == "<":
        if p.major is None:
            return _NOTHING
        return Interval(_ZERO, p.floor)
    # exact or x-range
    if p.exact is not None:
        return Interval(p.exact, p.exact, upper_inclusive=True)
    return Interval(p.floor, p.ceiling)


def _comparator_set(text: str) -> Interval:
    text = text.strip()
    if not text:
        return _ANY

    hyphen = _HYPHEN_RE.match(text)
    if hyphen is not None:
        low = _parse_partial(hyphen.group(1))
        high = _parse_partial(hyphen.group(2))
        if high.exact is not None:
            upper = Interval(_ZERO, high.exact, upper_inclusive=True)
        else:
            upper = Interval(_ZERO, high.ceiling)
        return Interval(low.floor, None).intersect(upper)

    result = _ANY
    for token in _OPERATOR_SPACE_RE.sub(r"\1", text).split():
        result = result.intersect(_comparator(token))
    return result


def parse_range(expr: str) -> tuple[Interval, ...]:
    """Read ``expr`` into its non-empty intervals (an empty tuple matches nothing)."""
    intervals = (_comparator_set(part) for part in expr.split("||"))
    return tuple(interval for interval in intervals if not interval.empty)


def satisfies(installed: str, expr: str) -> bool:
    v = _parse_version(installed)
    return any(interval.contains(v) for interval in parse_range(expr))


def intersects(left: str, right: str) -> bool:
    """True when at least one version satisfies both ranges."""
    return any(
        not a.intersect(b).empty for a in parse_range(left) for b in parse_range(right)
    )
