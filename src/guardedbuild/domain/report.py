"""Report — a periodic report and its guarded builder.

Only ``title`` is required.  Everything else is optional-heavy
configuration that typically arrives piecemeal from a form or a job
definition: summary and tags default to empty, ``created_at`` defaults
to the build time (evaluated lazily, per build).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Self

from pydantic import BaseModel

from guardedbuild.domain.builder import GuardedBuilder
from guardedbuild.domain.rules import (
    each,
    instance_of,
    matches,
    max_length,
    non_empty_text,
    optional,
    required,
)

TITLE_MAX_LENGTH = 200
SUMMARY_MAX_LENGTH = 2000


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Report(BaseModel):
    """An immutable, fully validated report."""

    model_config = {"frozen": True}

    title: str
    summary: str = ""
    author: str | None = None
    period: str | None = None
    tags: tuple[str, ...] = ()
    created_at: datetime


class ReportBuilder(GuardedBuilder[Report]):
    """Fluent builder for :class:`Report`."""

    model = Report
    FIELDS = (
        required(
            "title",
            non_empty_text,
            max_length(TITLE_MAX_LENGTH),
            description="Report headline",
        ),
        optional(
            "summary",
            instance_of(str),
            max_length(SUMMARY_MAX_LENGTH),
            default=str,
            description="Short abstract (default: empty)",
        ),
        optional("author", non_empty_text, description="Who wrote the report"),
        optional(
            "period",
            matches(r"\d{4}-(0[1-9]|1[0-2])", "a month in YYYY-MM form"),
            description="Reporting period, YYYY-MM",
        ),
        optional(
            "tags",
            each(non_empty_text),
            default=tuple,
            description="Classification tags (default: none)",
        ),
        optional(
            "created_at",
            instance_of(datetime, str),
            default=_utcnow,
            description="Creation timestamp (default: build time, UTC)",
        ),
    )

    def title(self, value: str) -> Self:
        return self.set("title", value)

    def summary(self, value: str) -> Self:
        return self.set("summary", value)

    def author(self, value: str) -> Self:
        return self.set("author", value)

    def period(self, value: str) -> Self:
        return self.set("period", value)

    def tags(self, *tags: str) -> Self:
        return self.set("tags", tags)

    def created_at(self, value: datetime) -> Self:
        return self.set("created_at", value)
