"""Field requirement rules, validators, and cross-field constraints.

A builder type declares its rules once, as class-level tables:

- :class:`FieldRule` — name, requirement level, optional lazy default
  supplier, and validators.
- :class:`Constraint` — a rule over several resolved field values
  (e.g. "at least one of email/phone").

Validators are pure callables ``value -> Verdict``.  They never raise
for bad input; a failing :class:`Verdict` carries the human-readable
reason reported by ``build()``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sized
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Requirement(StrEnum):
    """Requirement level of a field slot."""

    REQUIRED = "required"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class Verdict:
    """Outcome of a single validation predicate."""

    ok: bool
    reason: str = ""

    @classmethod
    def passed(cls) -> Verdict:
        return _PASSED

    @classmethod
    def failed(cls, reason: str) -> Verdict:
        return cls(ok=False, reason=reason)


_PASSED = Verdict(ok=True)

Validator = Callable[[Any], Verdict]
DefaultSupplier = Callable[[], Any]


def is_blank(value: Any) -> bool:
    """Return True for ``None`` and whitespace-only strings.

    Empty collections are *not* blank; an empty tag list is a value.
    """
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


@dataclass(frozen=True)
class FieldRule:
    """Declaration of one field slot.

    Attributes:
        name: Field name; must match an attribute of the built model.
        requirement: ``required`` or ``optional``.
        default: Zero-argument supplier evaluated at build time when the
            field is unset.  ``None`` means "no default".
        validators: Predicates applied, in order, to the resolved value.
        description: One-line help text (shown by ``guardedbuild fields``).
        blank_is_unset: Treat ``None`` / whitespace-only strings as unset.
    """

    name: str
    requirement: Requirement = Requirement.OPTIONAL
    default: DefaultSupplier | None = None
    validators: tuple[Validator, ...] = ()
    description: str = ""
    blank_is_unset: bool = True

    @property
    def required(self) -> bool:
        return self.requirement == Requirement.REQUIRED

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def check(self, value: Any) -> list[str]:
        """Run every validator and return the failure reasons (empty if valid)."""
        reasons: list[str] = []
        for validator in self.validators:
            verdict = validator(value)
            if not verdict.ok:
                reasons.append(verdict.reason)
        return reasons


def required(
    name: str,
    *validators: Validator,
    default: DefaultSupplier | None = None,
    description: str = "",
) -> FieldRule:
    """Shorthand for a required field.

    With a *default*, an unset or blank value resolves to the supplier's
    result, which is then validated like an explicit value.
    """
    return FieldRule(
        name=name,
        requirement=Requirement.REQUIRED,
        default=default,
        validators=validators,
        description=description,
    )


def optional(
    name: str,
    *validators: Validator,
    default: DefaultSupplier | None = None,
    description: str = "",
) -> FieldRule:
    """Shorthand for an optional field, with or without a default supplier."""
    return FieldRule(
        name=name,
        requirement=Requirement.OPTIONAL,
        default=default,
        validators=validators,
        description=description,
    )


@dataclass(frozen=True)
class Constraint:
    """A rule over several resolved field values.

    ``check`` receives a read-only mapping of every declared field to its
    resolved value (``None`` when absent).  ``fields`` lists the fields
    the constraint reads; they are checked against the rule table when
    the builder type is declared.
    """

    name: str
    check: Callable[[Mapping[str, Any]], Verdict]
    fields: tuple[str, ...] = field(default_factory=tuple)
    description: str = ""


def at_least_one_of(name: str, *fields: str) -> Constraint:
    """Constraint requiring at least one of *fields* to resolve to a value."""
    listed = " or ".join(fields)

    def _check(values: Mapping[str, Any]) -> Verdict:
        if any(not is_blank(values.get(f)) for f in fields):
            return Verdict.passed()
        return Verdict.failed(f"at least one of {listed} is required")

    return Constraint(
        name=name,
        check=_check,
        fields=tuple(fields),
        description=f"at least one of {listed}",
    )


# ---------------------------------------------------------------------------
# Ready-made validators
# ---------------------------------------------------------------------------


def non_empty_text(value: Any) -> Verdict:
    """Value must be a string with at least one non-whitespace character."""
    if not isinstance(value, str):
        return Verdict.failed(f"must be text, got {type(value).__name__}")
    if not value.strip():
        return Verdict.failed("must not be empty")
    return Verdict.passed()


def max_length(limit: int) -> Validator:
    def _check(value: Any) -> Verdict:
        if not isinstance(value, Sized):
            return Verdict.failed(f"must have a length, got {type(value).__name__}")
        if len(value) > limit:
            return Verdict.failed(f"must be at most {limit} characters")
        return Verdict.passed()

    return _check


def matches(pattern: str, description: str) -> Validator:
    """Value must be a string fully matching *pattern*.

    *description* names the expected shape in the failure reason,
    e.g. ``"an email address"``.
    """
    compiled = re.compile(pattern)

    def _check(value: Any) -> Verdict:
        if not isinstance(value, str) or compiled.fullmatch(value) is None:
            return Verdict.failed(f"must be {description}")
        return Verdict.passed()

    return _check


def one_of(*choices: Any) -> Validator:
    allowed = ", ".join(str(c) for c in choices)

    def _check(value: Any) -> Verdict:
        if value not in choices:
            return Verdict.failed(f"must be one of: {allowed}")
        return Verdict.passed()

    return _check


def instance_of(*types: type) -> Validator:
    names = " or ".join(t.__name__ for t in types)

    def _check(value: Any) -> Verdict:
        if not isinstance(value, types):
            return Verdict.failed(f"must be {names}, got {type(value).__name__}")
        return Verdict.passed()

    return _check


def at_least(minimum: int) -> Validator:
    def _check(value: Any) -> Verdict:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return Verdict.failed(f"must be a number, got {type(value).__name__}")
        if value < minimum:
            return Verdict.failed(f"must be at least {minimum}")
        return Verdict.passed()

    return _check


def each(validator: Validator) -> Validator:
    """Apply *validator* to every item of an iterable value.

    Reports the first failing item by position.
    """

    def _check(value: Any) -> Verdict:
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            return Verdict.failed(f"must be a collection, got {type(value).__name__}")
        for index, item in enumerate(value):
            verdict = validator(item)
            if not verdict.ok:
                return Verdict.failed(f"item {index} {verdict.reason}")
        return Verdict.passed()

    return _check
