"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any

from .core import Problem, ValidationResult
from .errors import OverlapValidationError


def problem_to_dict(problem: Problem) -> dict[str, str]:
    if isinstance(problem, OverlapValidationError):
        return problem.to_dict()
    return {
        "kind": "parse",
        "error": type(problem).__name__,
        "range": problem.text,
        "message": str(problem),
    }


def aggregate(result: ValidationResult) -> dict[str, Any]:
    """Aggregate a validation result into a single JSON-serialisable report.

    Definitions are listed in the order their first problem was found; each
    carries its problems as dicts with at least ``kind`` and ``message``.
    """
    definitions = [
        {
            "identity": str(identity),
            "problems": [problem_to_dict(p) for p in problems],
        }
        for identity, problems in result.problems.items()
    ]

    report: dict[str, Any] = {
        "version": "1",
        "hasProblems": not result.ok,
        "definitions": definitions,
        "totals": {
            "candidates": len(result.candidates),
            "definitions": len(definitions),
            "problems": result.problem_count,
        },
    }

    return report
