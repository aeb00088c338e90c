"""Notification — an outbound message and its guarded builder.

A notification needs a message and somewhere to send it: at least one
of ``email`` / ``phone`` (the ``recipient`` constraint).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel

from guardedbuild.domain.builder import GuardedBuilder
from guardedbuild.domain.rules import (
    at_least_one_of,
    matches,
    max_length,
    non_empty_text,
    one_of,
    optional,
    required,
)

MESSAGE_MAX_LENGTH = 500
EMAIL_PATTERN = r"[^@\s]+@[^@\s]+\.[^@\s]+"
PHONE_PATTERN = r"\+[1-9]\d{6,14}"


class Priority(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class Notification(BaseModel):
    """An immutable notification with at least one recipient channel."""

    model_config = {"frozen": True}

    message: str
    email: str | None = None
    phone: str | None = None
    priority: Priority = Priority.NORMAL
    subject: str | None = None

    @property
    def channels(self) -> tuple[str, ...]:
        """Delivery channels this notification can use, email first."""
        found: list[str] = []
        if self.email:
            found.append("email")
        if self.phone:
            found.append("sms")
        return tuple(found)


class NotificationBuilder(GuardedBuilder[Notification]):
    """Fluent builder for :class:`Notification`."""

    model = Notification
    FIELDS = (
        required(
            "message",
            non_empty_text,
            max_length(MESSAGE_MAX_LENGTH),
            description="Body text",
        ),
        optional(
            "email",
            matches(EMAIL_PATTERN, "an email address"),
            description="Recipient email address",
        ),
        optional(
            "phone",
            matches(PHONE_PATTERN, "a phone number in +<country><number> form"),
            description="Recipient phone number (E.164)",
        ),
        optional(
            "priority",
            one_of(*(p.value for p in Priority)),
            default=lambda: Priority.NORMAL,
            description="low, normal, high or urgent (default: normal)",
        ),
        optional("subject", max_length(120), description="Email subject line"),
    )
    CONSTRAINTS = (at_least_one_of("recipient", "email", "phone"),)

    def message(self, value: str) -> Self:
        return self.set("message", value)

    def email(self, value: str) -> Self:
        return self.set("email", value)

    def phone(self, value: str) -> Self:
        return self.set("phone", value)

    def priority(self, value: Priority | str) -> Self:
        return self.set("priority", value)

    def subject(self, value: str) -> Self:
        return self.set("subject", value)
