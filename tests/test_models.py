from __future__ import annotations

import pytest

from libdef_resolver.models import (
    EXACT,
    GTE,
    LTE,
    WILDCARD,
    Concrete,
    LibDefIdentity,
    LibDefRange,
    Version,
    Wildcard,
    component,
)


def test_wildcards_are_interchangeable() -> None:
    assert Wildcard() == WILDCARD
    assert hash(Wildcard()) == hash(WILDCARD)
    assert str(WILDCARD) == "x"


def test_component_coercion() -> None:
    assert component(3) == Concrete(3)
    assert component("x") is WILDCARD
    assert component(Concrete(1)) == Concrete(1)
    with pytest.raises(ValueError):
        component("3")


@pytest.mark.parametrize("value", [-1, True, 1.5])
def test_concrete_rejects_invalid_values(value: object) -> None:
    with pytest.raises(ValueError):
        Concrete(value)  # type: ignore[arg-type]


def test_version_rejects_unknown_range() -> None:
    with pytest.raises(ValueError):
        Version.of(1, 0, 0, range=">")


def test_exact_version_cannot_be_bounded() -> None:
    with pytest.raises(ValueError):
        Version.of(1, 0, 0, range=EXACT, upper_bound=Version.of(2, 0, 0, range=LTE))


def test_upper_bound_cannot_nest() -> None:
    nested = Version.of(2, 0, 0, range=LTE, upper_bound=Version.of(3, 0, 0, range=LTE))
    with pytest.raises(ValueError):
        Version.of(1, 0, 0, range=GTE, upper_bound=nested)


def test_upper_bound_needs_a_comparison() -> None:
    with pytest.raises(ValueError):
        Version.of(1, 0, 0, range=GTE, upper_bound=Version.of(2, 0, 0))


def test_lower_drops_the_bound_only() -> None:
    version = Version.of(0, 2, "x", range=GTE, upper_bound=Version.of(0, 4, "x", range=LTE))
    assert version.is_bounded
    assert version.lower == Version.of(0, 2, "x", range=GTE)
    assert not version.lower.is_bounded


def test_replace_component_returns_new_version() -> None:
    version = Version.of(0, "x", 1)
    replaced = version.replace_component("minor", 7)
    assert replaced == Version.of(0, 7, 1)
    assert version.minor == WILDCARD
    with pytest.raises(ValueError):
        version.replace_component("build", 1)


def test_identity_string_and_validation() -> None:
    assert str(LibDefIdentity("lodash", "v4.x.x")) == "lodash@v4.x.x"
    with pytest.raises(ValueError):
        LibDefIdentity("", "v4.x.x")


def test_libdef_range_from_strings() -> None:
    libdef = LibDefRange.from_strings("lodash", "v4.x.x", ">=v0.38.x")
    assert libdef.identity == LibDefIdentity("lodash", "v4.x.x")
    assert libdef.version == Version.of(0, 38, "x", range=GTE)
    assert libdef.to_dict() == {"name": "lodash", "version": "v4.x.x", "range": ">=v0.38.x"}
