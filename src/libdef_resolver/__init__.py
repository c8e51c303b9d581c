"""libdef-resolver core package.

Resolves which versioned library definition applies to a runtime version and
validates that the ranges of one definition do not overlap. The core is pure;
the ``validators`` entrypoints add manifest loading and configuration.
"""

from .core import (
    ValidationResult,
    collect_candidates,
    find_overlaps,
    merge_problems,
    resolve,
    validate_definitions,
)
from .parsers.version import format_version, parse_directory_name, parse_target, parse_version
from .satisfaction import satisfies, to_range_string
from .simplify import simplify

__all__ = [
    "ValidationResult",
    "collect_candidates",
    "find_overlaps",
    "format_version",
    "merge_problems",
    "parse_directory_name",
    "parse_target",
    "parse_version",
    "resolve",
    "satisfies",
    "simplify",
    "to_range_string",
    "validate_definitions",
]
