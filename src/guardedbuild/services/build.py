"""BuildService — run registered builders for callers that speak in names.

Callers (the CLI, a request handler) supply a builder kind and a mapping
of field values.  Configured presets for that kind are applied first, so
caller values win (last write wins).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from guardedbuild.domain.errors import UnknownBuilderError, UnknownFieldError
from guardedbuild.domain.problems import group_by_field
from guardedbuild.domain.registry import builder_kinds, get_builder
from guardedbuild.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)


class BuildService:
    """Build, describe, and list registered builders."""

    def __init__(self, presets: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._presets = presets or {}

    def build(self, kind: str, values: Mapping[str, Any]) -> ServiceResult:
        """Apply presets and *values* to a fresh builder of *kind* and build it."""
        op = f"build_{kind}"
        try:
            builder = get_builder(kind).new()
        except UnknownBuilderError as exc:
            return _unknown_builder(op, exc)

        preset = self._presets.get(kind, {})
        for source, layer in (("preset", preset), ("input", values)):
            try:
                builder.update(dict(layer))
            except UnknownFieldError as exc:
                return ServiceResult.failure(
                    op,
                    ErrorCode.UNKNOWN_FIELD,
                    str(exc),
                    {"field": exc.field, "source": source, "fields": list(builder.field_names())},
                )

        outcome = builder.try_build()
        if not outcome.ok:
            logger.debug("%s rejected %d problem(s)", op, len(outcome.problems))
            return ServiceResult.failure(
                op,
                ErrorCode.VALIDATION_FAILED,
                f"{len(outcome.problems)} problem(s) found",
                {
                    "problems": [p.to_dict() for p in outcome.problems],
                    "by_field": group_by_field(outcome.problems),
                },
            )

        return ServiceResult.success(op, outcome.unwrap().model_dump(mode="json"))

    def describe(self, kind: str) -> ServiceResult:
        """Describe the rule table of the builder registered under *kind*."""
        op = "describe_builder"
        try:
            builder_cls = get_builder(kind)
        except UnknownBuilderError as exc:
            return _unknown_builder(op, exc)

        fields = [
            {
                "name": rule.name,
                "requirement": str(rule.requirement),
                "has_default": rule.has_default,
                "description": rule.description,
            }
            for rule in builder_cls.FIELDS
        ]
        constraints = [
            {"name": c.name, "fields": list(c.fields), "description": c.description}
            for c in builder_cls.CONSTRAINTS
        ]
        return ServiceResult.success(
            op,
            {
                "kind": kind,
                "model": builder_cls.model.__name__,
                "fields": fields,
                "constraints": constraints,
            },
        )

    def kinds(self) -> ServiceResult:
        items = [
            {"kind": kind, "model": get_builder(kind).model.__name__}
            for kind in builder_kinds()
        ]
        return ServiceResult.success("list_kinds", {"count": len(items), "items": items})


def _unknown_builder(op: str, exc: UnknownBuilderError) -> ServiceResult:
    return ServiceResult.failure(
        op,
        ErrorCode.UNKNOWN_BUILDER,
        str(exc),
        {"kind": exc.kind, "available": exc.available},
    )
