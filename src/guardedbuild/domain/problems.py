"""Build problems — the structured failure payload of a guarded build.

A failed build reports every problem it found, in a stable order:
field problems in field declaration order, then constraint problems in
constraint declaration order.  The ``FieldProblem`` shape and the
``ProblemKind`` strings are the contract callers render from (for
example as per-field form errors), so neither may change casually.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class ProblemKind(StrEnum):
    """Category of a build problem."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_FIELD_VALUE = "invalid_field_value"
    CONSTRAINT_VIOLATION = "constraint_violation"


class FieldProblem(BaseModel):
    """One (field, reason) problem found by ``build()``.

    For constraint violations ``field`` holds the constraint name.
    """

    model_config = {"frozen": True}

    field: str
    kind: ProblemKind
    reason: str

    @classmethod
    def missing(cls, field: str) -> FieldProblem:
        return cls(
            field=field,
            kind=ProblemKind.MISSING_REQUIRED_FIELD,
            reason=f"{field} is required",
        )

    @classmethod
    def invalid(cls, field: str, reason: str) -> FieldProblem:
        return cls(field=field, kind=ProblemKind.INVALID_FIELD_VALUE, reason=reason)

    @classmethod
    def violation(cls, constraint: str, reason: str) -> FieldProblem:
        return cls(field=constraint, kind=ProblemKind.CONSTRAINT_VIOLATION, reason=reason)

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "kind": str(self.kind), "reason": self.reason}


def group_by_field(problems: tuple[FieldProblem, ...]) -> dict[str, list[str]]:
    """Group problem reasons by field, preserving first-seen field order."""
    grouped: dict[str, list[str]] = {}
    for problem in problems:
        grouped.setdefault(problem.field, []).append(problem.reason)
    return grouped
