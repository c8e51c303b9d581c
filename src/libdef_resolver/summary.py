"""Human-readable summary of a validation run."""

from __future__ import annotations

from .core import ValidationResult


def render_summary(result: ValidationResult) -> str:
    """Return one block per definition with problems, or a success line."""
    if result.ok:
        return (
            "All versioned library definitions are named and structured "
            f"correctly. (Found {len(result.candidates)})\n"
        )

    lines: list[str] = []
    for identity, problems in result.problems.items():
        lines.append(f"Found some problems with {identity}:")
        lines.extend(f"  * {problem}" for problem in problems)
        lines.append("")
    return "\n".join(lines)
