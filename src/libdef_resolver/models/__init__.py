"""Data models for definition version ranges."""

from __future__ import annotations

from .libdef_range import LibDefIdentity, LibDefRange
from .version import EXACT, GTE, LTE, WILDCARD, Component, Concrete, Version, Wildcard, component

__all__ = [
    "Component",
    "Concrete",
    "EXACT",
    "GTE",
    "LibDefIdentity",
    "LibDefRange",
    "LTE",
    "Version",
    "WILDCARD",
    "Wildcard",
    "component",
]
