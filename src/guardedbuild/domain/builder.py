"""GuardedBuilder — fluent configuration with one validating build step.

A builder subclass declares, once per type:

- ``model``: the frozen pydantic model it produces.
- ``FIELDS``: a tuple of :class:`~guardedbuild.domain.rules.FieldRule`.
- ``CONSTRAINTS``: an optional tuple of cross-field
  :class:`~guardedbuild.domain.rules.Constraint`.

Setters only record values.  All checking happens in :meth:`try_build` /
:meth:`build`, which collect *every* problem before reporting.

INVARIANT: A built value exists only if every required field resolved to
a value (explicit or default) and every field and constraint passed.

INVARIANT: The first build seals the builder.  Further ``set`` calls
raise :class:`BuilderSealedError`; further builds return the memoized
outcome, so repeated builds are always equal.

Usage::

    class ReportBuilder(GuardedBuilder[Report]):
        model = Report
        FIELDS = (required("title", non_empty_text),)

    report = ReportBuilder().set("title", "Monthly Report").build()
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Self

import pydantic
from pydantic import BaseModel

from guardedbuild.domain.errors import (
    BuilderSealedError,
    GuardedBuildError,
    RuleDeclarationError,
    UnknownFieldError,
    ValidationError,
)
from guardedbuild.domain.problems import FieldProblem
from guardedbuild.domain.rules import Constraint, FieldRule, is_blank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult[T: BaseModel]:
    """Outcome of a build attempt: a value, or zero-or-more problems.

    Attributes:
        builder: Name of the builder type that produced this outcome.
        value: The built model when ``ok``; otherwise None.
        problems: Ordered problems; empty when ``ok``.
    """

    builder: str
    value: T | None = None
    problems: tuple[FieldProblem, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.problems

    def unwrap(self) -> T:
        """Return the built value or raise :class:`ValidationError`."""
        if self.problems:
            raise ValidationError(self.builder, self.problems)
        if self.value is None:
            raise GuardedBuildError(f"{self.builder} produced neither a value nor problems")
        return self.value


def _index_rules(
    owner: str,
    fields: tuple[FieldRule, ...],
    constraints: tuple[Constraint, ...],
    model: type[BaseModel] | None,
) -> dict[str, FieldRule]:
    """Check a rule table for consistency and index it by field name."""
    index: dict[str, FieldRule] = {}
    for rule in fields:
        if rule.name in index:
            raise RuleDeclarationError(f"{owner} declares field '{rule.name}' twice")
        if model is not None and rule.name not in model.model_fields:
            raise RuleDeclarationError(
                f"{owner}.{rule.name} has no matching field on {model.__name__}"
            )
        index[rule.name] = rule

    seen: set[str] = set()
    for constraint in constraints:
        if constraint.name in seen:
            raise RuleDeclarationError(f"{owner} declares constraint '{constraint.name}' twice")
        seen.add(constraint.name)
        unknown = [f for f in constraint.fields if f not in index]
        if unknown:
            raise RuleDeclarationError(
                f"{owner} constraint '{constraint.name}' refers to undeclared "
                f"field(s): {', '.join(unknown)}"
            )
    return index


class GuardedBuilder[T: BaseModel]:
    """Generic guarded builder.  Subclass it and declare the rule tables."""

    model: ClassVar[type[BaseModel]]
    FIELDS: ClassVar[tuple[FieldRule, ...]] = ()
    CONSTRAINTS: ClassVar[tuple[Constraint, ...]] = ()

    _rules: ClassVar[dict[str, FieldRule]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._rules = _index_rules(
            cls.__name__,
            cls.FIELDS,
            cls.CONSTRAINTS,
            getattr(cls, "model", None),
        )

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._outcome: BuildResult[T] | None = None

    @classmethod
    def new(cls) -> Self:
        """Return a fresh, empty builder."""
        return cls()

    @classmethod
    def rule(cls, name: str) -> FieldRule:
        """Return the declared rule for *name*."""
        try:
            return cls._rules[name]
        except KeyError:
            raise UnknownFieldError(cls.__name__, name) from None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(rule.name for rule in cls.FIELDS)

    def __repr__(self) -> str:
        state = "sealed" if self.sealed else "open"
        return f"<{type(self).__name__} {state} set={sorted(self._values)}>"

    # --- Configuration ---------------------------------------------------

    def set(self, name: str, value: Any) -> Self:
        """Store *value* in field *name*, replacing any earlier value.

        No validation happens here; see :meth:`build`.
        """
        self.rule(name)
        self._ensure_open()
        self._values[name] = value
        return self

    def update(self, values: dict[str, Any]) -> Self:
        """Call :meth:`set` for each item of *values*, in order."""
        for name, value in values.items():
            self.set(name, value)
        return self

    def unset(self, name: str) -> Self:
        """Return field *name* to the unset state."""
        self.rule(name)
        self._ensure_open()
        self._values.pop(name, None)
        return self

    def _ensure_open(self) -> None:
        if self._outcome is not None:
            raise BuilderSealedError(
                f"{type(self).__name__} was already built; create a new builder"
            )

    # --- Inspection (never seals) ----------------------------------------

    @property
    def sealed(self) -> bool:
        return self._outcome is not None

    def is_set(self, name: str) -> bool:
        """Whether *name* was explicitly set (blank values included)."""
        self.rule(name)
        return name in self._values

    def values(self) -> dict[str, Any]:
        """Copy of the explicitly set values."""
        return dict(self._values)

    def missing(self) -> tuple[str, ...]:
        """Required fields that currently have no usable value and no default."""
        return tuple(
            rule.name
            for rule in self.FIELDS
            if rule.required and not rule.has_default and not self._usable(rule)[0]
        )

    def _usable(self, rule: FieldRule) -> tuple[bool, Any]:
        """Return ``(present, value)`` after applying the blank policy."""
        if rule.name not in self._values:
            return False, None
        value = self._values[rule.name]
        if rule.blank_is_unset and is_blank(value):
            return False, None
        return True, value

    # --- Terminal step ---------------------------------------------------

    def try_build(self) -> BuildResult[T]:
        """Validate and construct, returning a :class:`BuildResult`.

        Seals the builder.  Never raises for validation problems.
        """
        if self._outcome is None:
            self._outcome = self._evaluate()
            logger.debug(
                "Build %s: %s",
                type(self).__name__,
                "ok" if self._outcome.ok else f"{len(self._outcome.problems)} problem(s)",
            )
        return self._outcome

    def build(self) -> T:
        """Validate and construct the value.

        Raises:
            ValidationError: Listing every problem found.
        """
        return self.try_build().unwrap()

    def _evaluate(self) -> BuildResult[T]:
        name = type(self).__name__
        by_field: dict[str, list[FieldProblem]] = {rule.name: [] for rule in self.FIELDS}
        resolved: dict[str, Any] = {}

        for rule in self.FIELDS:
            present, value = self._usable(rule)
            if not present:
                if rule.default is not None:
                    value = rule.default()
                elif rule.required:
                    by_field[rule.name].append(FieldProblem.missing(rule.name))
                    resolved[rule.name] = None
                    continue
                else:
                    resolved[rule.name] = None
                    continue
            if isinstance(value, Iterator):
                value = tuple(value)
            resolved[rule.name] = value
            by_field[rule.name].extend(
                FieldProblem.invalid(rule.name, r) for r in rule.check(value)
            )

        model_value: T | None = None
        try:
            model_value = self.model.model_validate(resolved)  # type: ignore[assignment]
        except pydantic.ValidationError as exc:
            # A field that already failed a rule keeps only the rule's reasons.
            failed = {field for field, found in by_field.items() if found}
            for problem in self._model_problems(exc):
                if problem.field not in failed:
                    by_field.setdefault(problem.field, []).append(problem)

        problems = [p for field_problems in by_field.values() for p in field_problems]
        view = MappingProxyType(resolved)
        for constraint in self.CONSTRAINTS:
            verdict = constraint.check(view)
            if not verdict.ok:
                problems.append(FieldProblem.violation(constraint.name, verdict.reason))

        if problems:
            return BuildResult(builder=name, problems=tuple(problems))
        return BuildResult(builder=name, value=model_value)

    def _model_problems(self, exc: pydantic.ValidationError) -> tuple[FieldProblem, ...]:
        """Translate pydantic type errors into field problems, in field order."""
        order = {name: i for i, name in enumerate(self.field_names())}
        problems: list[FieldProblem] = []
        for error in exc.errors():
            loc = error.get("loc") or ()
            field = str(loc[0]) if loc else type(self).__name__
            problem = FieldProblem.invalid(field, error["msg"])
            if problem not in problems:
                problems.append(problem)
        problems.sort(key=lambda p: order.get(p.field, len(order)))
        return tuple(problems)
