"""Core resolution and validation entrypoints.

This module MUST NOT touch the file system or the network so it can be used by
both the command line entrypoints and any caller that assembles candidates
itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from itertools import combinations
from typing import TypeAlias

from .errors import OverlapValidationError, VersionParseError
from .logging import get_logger
from .models import LibDefIdentity, LibDefRange, Version
from .parsers import semver
from .parsers.version import parse_directory_name, parse_version
from .satisfaction import satisfies, to_range_string
from .simplify import simplify

logger = get_logger(__name__)

Problem: TypeAlias = VersionParseError | OverlapValidationError
ProblemMapping: TypeAlias = dict[LibDefIdentity, list[Problem]]


def _range_text(candidate: LibDefRange) -> str:
    return to_range_string(simplify(candidate.version))


def resolve(target: Version, candidates: Iterable[LibDefRange]) -> list[LibDefRange]:
    """Return the candidates whose simplified version satisfies ``target``, in input order.

    Each candidate is the (possibly wildcarded) pattern and ``target`` is
    rendered as the range, so candidate wildcards only stand for one digit.

    No deduplication or tie-breaking happens here; several matches for one
    identity are an overlap that ``find_overlaps`` reports.
    """
    range_text = to_range_string(target)
    matches: list[LibDefRange] = []
    for candidate in candidates:
        pattern = simplify(candidate.version)
        matched = satisfies(pattern, range_text)
        logger.debug(
            "candidate_checked",
            identity=str(candidate.identity),
            pattern=str(pattern),
            range=range_text,
            matched=matched,
        )
        if matched:
            matches.append(candidate)
    return matches


def find_overlaps(
    candidates: Iterable[LibDefRange],
) -> dict[LibDefIdentity, list[OverlapValidationError]]:
    """Report every pair of ranges of one identity that share a concrete version.

    Every group is checked; only identities with at least one overlap appear
    in the result.
    """
    groups: dict[LibDefIdentity, list[tuple[LibDefRange, str]]] = {}
    for candidate in candidates:
        groups.setdefault(candidate.identity, []).append((candidate, _range_text(candidate)))

    overlaps: dict[LibDefIdentity, list[OverlapValidationError]] = {}
    for identity, group in groups.items():
        for (first, first_range), (second, second_range) in combinations(group, 2):
            if not semver.intersects(first_range, second_range):
                continue
            logger.debug(
                "overlap_found",
                identity=str(identity),
                first=first_range,
                second=second_range,
            )
            overlaps.setdefault(identity, []).append(
                OverlapValidationError(
                    identity=identity,
                    first=first.version,
                    second=second.version,
                )
            )
    return overlaps


def collect_candidates(
    entries: Iterable[tuple[str, str, str]],
    prefix: str | None = None,
) -> tuple[list[LibDefRange], dict[LibDefIdentity, list[VersionParseError]]]:
    """Parse ``(pkg_name, pkg_version, range_text)`` entries into candidates.

    ``range_text`` is a directory name when ``prefix`` is given and a bare
    version range otherwise. Entries that fail to parse are collected per
    identity instead of aborting the batch.
    """
    candidates: list[LibDefRange] = []
    problems: dict[LibDefIdentity, list[VersionParseError]] = {}
    for pkg_name, pkg_version, range_text in entries:
        identity = LibDefIdentity(pkg_name=pkg_name, pkg_version=pkg_version)
        try:
            if prefix is None:
                version = parse_version(range_text)
            else:
                version = parse_directory_name(range_text, prefix)
        except VersionParseError as exc:
            logger.debug("range_rejected", identity=str(identity), range=range_text, error=str(exc))
            problems.setdefault(identity, []).append(exc)
            continue
        candidates.append(LibDefRange(identity=identity, version=version))
    return candidates, problems


def merge_problems(*mappings: Mapping[LibDefIdentity, Sequence[Problem]]) -> ProblemMapping:
    """Merge per-identity problem mappings into a new mapping."""
    merged: ProblemMapping = {}
    for mapping in mappings:
        for identity, problems in mapping.items():
            if problems:
                merged.setdefault(identity, []).extend(problems)
    return merged


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a batch of definition ranges."""

    candidates: tuple[LibDefRange, ...]
    problems: ProblemMapping = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.problems

    @property
    def problem_count(self) -> int:
        return sum(len(problems) for problems in self.problems.values())


def validate_definitions(
    entries: Iterable[tuple[str, str, str]],
    prefix: str | None = None,
) -> ValidationResult:
    """Parse every entry and check the parsed ranges for overlaps in one pass."""
    candidates, parse_problems = collect_candidates(entries, prefix)
    problems = merge_problems(parse_problems, find_overlaps(candidates))
    return ValidationResult(candidates=tuple(candidates), problems=problems)
