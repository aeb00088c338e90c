"""guardedbuild — fluent builders that validate once, at build time."""

from guardedbuild.domain.builder import BuildResult, GuardedBuilder
from guardedbuild.domain.errors import (
    BuilderSealedError,
    GuardedBuildError,
    RuleDeclarationError,
    UnknownBuilderError,
    UnknownFieldError,
    ValidationError,
)
from guardedbuild.domain.problems import FieldProblem, ProblemKind
from guardedbuild.domain.rules import (
    Constraint,
    FieldRule,
    Requirement,
    Verdict,
    at_least_one_of,
    optional,
    required,
)

__version__ = "0.1.0"

__all__ = [
    "BuildResult",
    "BuilderSealedError",
    "Constraint",
    "FieldProblem",
    "FieldRule",
    "GuardedBuildError",
    "GuardedBuilder",
    "ProblemKind",
    "Requirement",
    "RuleDeclarationError",
    "UnknownBuilderError",
    "UnknownFieldError",
    "ValidationError",
    "Verdict",
    "__version__",
    "at_least_one_of",
    "optional",
    "required",
]
