"""Version model for definition version ranges."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TypeAlias

GTE = ">="
LTE = "<="
EXACT = ""

_VALID_RANGES = {GTE, LTE, EXACT}
_COMPONENT_NAMES = ("major", "minor", "patch")


@dataclass(frozen=True, slots=True)
class Concrete:
    """A concrete, non-negative version component."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Version component must be an integer: {self.value!r}")
        if self.value < 0:
            raise ValueError(f"Version component must be non-negative: {self.value}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Wildcard:
    """The ``x`` component: stands for any single digit 0-9 when expanded."""

    def __str__(self) -> str:
        return "x"


WILDCARD = Wildcard()

Component: TypeAlias = Concrete | Wildcard


def component(value: int | str | Component) -> Component:
    """Coerce ``7``, ``"x"`` or an existing component into a component."""
    if isinstance(value, (Concrete, Wildcard)):
        return value
    if value == "x":
        return WILDCARD
    if isinstance(value, int):
        return Concrete(value)
    raise ValueError(f"Invalid version component: {value!r}")


@dataclass(frozen=True, slots=True)
class Version:
    """A single version constraint, optionally paired with an upper bound.

    ``range`` is the comparison applied when the version is used as a
    constraint (``>=``, ``<=`` or exact). A bounded version carries a second,
    unbounded ``Version`` in ``upper_bound``.
    """

    range: str
    major: Component
    minor: Component
    patch: Component
    upper_bound: Version | None = None

    def __post_init__(self) -> None:
        if self.range not in _VALID_RANGES:
            raise ValueError(f"Invalid version range: {self.range!r}")
        for name in _COMPONENT_NAMES:
            if not isinstance(getattr(self, name), (Concrete, Wildcard)):
                raise ValueError(f"{name} must be a Concrete or Wildcard component")
        bound = self.upper_bound
        if bound is None:
            return
        if self.range == EXACT:
            raise ValueError("An exact version cannot carry an upper bound")
        if bound.upper_bound is not None:
            raise ValueError("An upper bound cannot carry its own upper bound")
        if bound.range == EXACT:
            raise ValueError("An upper bound must use a '>=' or '<=' range")

    def __str__(self) -> str:
        from ..parsers.version import format_version

        return format_version(self)

    @property
    def is_bounded(self) -> bool:
        return self.upper_bound is not None

    @property
    def components(self) -> tuple[Component, Component, Component]:
        return (self.major, self.minor, self.patch)

    @property
    def lower(self) -> Version:
        """This version without its upper bound."""
        if self.upper_bound is None:
            return self
        return replace(self, upper_bound=None)

    def replace_component(self, name: str, value: int | str | Component) -> Version:
        if name not in _COMPONENT_NAMES:
            raise ValueError(f"Unknown version component: {name}")
        return replace(self, **{name: component(value)})

    def same_numbers(self, other: Version) -> bool:
        """True when major, minor and patch match, ignoring ranges and bounds."""
        return self.components == other.components

    @classmethod
    def of(
        cls,
        major: int | str | Component,
        minor: int | str | Component,
        patch: int | str | Component,
        *,
        range: str = EXACT,
        upper_bound: Version | None = None,
    ) -> Version:
        return cls(
            range=range,
            major=component(major),
            minor=component(minor),
            patch=component(patch),
            upper_bound=upper_bound,
        )
