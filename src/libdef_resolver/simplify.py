"""Reduce bounded versions to their simplest equivalent form."""

from __future__ import annotations

import math

from .logging import get_logger
from .models import EXACT, LTE, WILDCARD, Component, Concrete, Version

logger = get_logger(__name__)


def _rank(value: Component, wildcard_rank: float) -> float:
    if isinstance(value, Concrete):
        return value.value
    return wildcard_rank


def simplify(version: Version) -> Version:
    """Collapse a bounded version into a single bound where one is redundant.

    Unbounded versions and pairs that cannot be reduced come back unchanged.
    For two ``<=`` bounds the wider one wins; for two ``>=`` bounds the
    narrower one does. A wildcard is the widest ``<=`` component and the
    lowest ``>=`` component.
    """
    upper = version.upper_bound
    if upper is None:
        return version

    lower = version.lower
    if lower == upper:
        result = upper
    elif lower.range != upper.range:
        if not lower.same_numbers(upper):
            return version
        result = Version(range=EXACT, major=lower.major, minor=WILDCARD, patch=WILDCARD)
    else:
        wildcard_rank = math.inf if lower.range == LTE else -1
        for lo, hi in zip(lower.components, upper.components):
            lo_rank = _rank(lo, wildcard_rank)
            hi_rank = _rank(hi, wildcard_rank)
            if lo_rank != hi_rank:
                result = upper if lo_rank < hi_rank else lower
                break
        else:
            return version

    logger.debug("simplified_bounded_version", original=str(version), simplified=str(result))
    return result
