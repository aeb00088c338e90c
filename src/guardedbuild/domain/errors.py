"""Exception hierarchy for guardedbuild.

Only :class:`ValidationError` reports problems with the values a caller
supplied, and it is only ever raised by ``build()``.  The remaining
errors signal programming mistakes (undeclared field names, mutation of
a sealed builder, malformed rule tables) and are raised immediately.
"""

from __future__ import annotations

from typing import Any

from guardedbuild.domain.problems import FieldProblem, ProblemKind, group_by_field


class GuardedBuildError(Exception):
    """Base class for all guardedbuild errors."""


class ValidationError(GuardedBuildError):
    """Raised by ``build()`` when one or more problems were found.

    Attributes:
        builder: Name of the builder type that failed.
        problems: Non-empty, ordered tuple of :class:`FieldProblem`.
    """

    def __init__(self, builder: str, problems: tuple[FieldProblem, ...]) -> None:
        if not problems:
            raise ValueError("ValidationError requires at least one problem")
        self.builder = builder
        self.problems = problems
        summary = "; ".join(f"{p.field}: {p.reason}" for p in problems)
        super().__init__(f"{builder} failed with {len(problems)} problem(s): {summary}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.builder == other.builder and self.problems == other.problems

    def __hash__(self) -> int:
        return hash((self.builder, self.problems))

    @property
    def fields(self) -> tuple[str, ...]:
        """Fields (or constraint names) with at least one problem, in order."""
        return tuple(group_by_field(self.problems))

    def of_kind(self, kind: ProblemKind) -> tuple[FieldProblem, ...]:
        return tuple(p for p in self.problems if p.kind == kind)

    def by_field(self) -> dict[str, list[str]]:
        """Map each field to its problem reasons (form-error shape)."""
        return group_by_field(self.problems)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [p.to_dict() for p in self.problems]


class UnknownFieldError(GuardedBuildError, KeyError):
    """A builder was asked about a field its rule table does not declare."""

    def __init__(self, builder: str, field: str) -> None:
        self.builder = builder
        self.field = field
        super().__init__(f"{builder} has no field named '{field}'")

    def __str__(self) -> str:
        return str(self.args[0])


class BuilderSealedError(GuardedBuildError, RuntimeError):
    """A builder was mutated after ``build()`` was called on it."""


class RuleDeclarationError(GuardedBuildError, TypeError):
    """A builder subclass declared an inconsistent rule table."""


class UnknownBuilderError(GuardedBuildError, KeyError):
    """No builder is registered under the requested kind."""

    def __init__(self, kind: str, available: list[str]) -> None:
        self.kind = kind
        self.available = available
        super().__init__(f"Unknown builder '{kind}' (available: {', '.join(available)})")

    def __str__(self) -> str:
        return str(self.args[0])
