"""Builder registry — look up builder types by kind name.

Populated with the built-in builders at import time.  Callers that
define their own builders register them with :func:`register_builder`.
"""

from __future__ import annotations

from typing import Any

from guardedbuild.domain.builder import GuardedBuilder
from guardedbuild.domain.errors import UnknownBuilderError
from guardedbuild.domain.notification import NotificationBuilder
from guardedbuild.domain.report import ReportBuilder

BUILDER_REGISTRY: dict[str, type[GuardedBuilder[Any]]] = {}


def register_builder(kind: str, builder_cls: type[GuardedBuilder[Any]]) -> None:
    """Register *builder_cls* under *kind*, replacing any earlier entry."""
    BUILDER_REGISTRY[kind] = builder_cls


def builder_kinds() -> list[str]:
    return sorted(BUILDER_REGISTRY)


def get_builder(kind: str) -> type[GuardedBuilder[Any]]:
    """Return the builder class registered under *kind*.

    Raises:
        UnknownBuilderError: If nothing is registered under *kind*.
    """
    try:
        return BUILDER_REGISTRY[kind]
    except KeyError:
        raise UnknownBuilderError(kind, builder_kinds()) from None


def new_builder(kind: str) -> GuardedBuilder[Any]:
    """Return a fresh, empty builder of the given kind."""
    return get_builder(kind).new()


def _register_builtins() -> None:
    register_builder("report", ReportBuilder)
    register_builder("notification", NotificationBuilder)


_register_builtins()
