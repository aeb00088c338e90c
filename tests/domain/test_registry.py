"""Tests for the builder registry."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from pydantic import BaseModel

from guardedbuild.domain import registry
from guardedbuild.domain.builder import GuardedBuilder
from guardedbuild.domain.errors import UnknownBuilderError
from guardedbuild.domain.notification import NotificationBuilder
from guardedbuild.domain.report import ReportBuilder
from guardedbuild.domain.rules import required


@pytest.fixture
def _clean_registry() -> Generator[None]:
    saved = dict(registry.BUILDER_REGISTRY)
    yield
    registry.BUILDER_REGISTRY.clear()
    registry.BUILDER_REGISTRY.update(saved)


class TestRegistry:
    def test_builtins_registered(self) -> None:
        assert registry.get_builder("report") is ReportBuilder
        assert registry.get_builder("notification") is NotificationBuilder
        assert registry.builder_kinds() == ["notification", "report"]

    def test_new_builder_is_fresh(self) -> None:
        a = registry.new_builder("report")
        b = registry.new_builder("report")
        assert isinstance(a, ReportBuilder)
        assert a is not b

    def test_unknown_kind(self) -> None:
        with pytest.raises(UnknownBuilderError) as exc_info:
            registry.get_builder("invoice")
        assert exc_info.value.kind == "invoice"
        assert exc_info.value.available == ["notification", "report"]

    @pytest.mark.usefixtures("_clean_registry")
    def test_register_custom_builder(self) -> None:
        class Ticket(BaseModel):
            model_config = {"frozen": True}
            summary: str

        class TicketBuilder(GuardedBuilder[Ticket]):
            model = Ticket
            FIELDS = (required("summary"),)

        registry.register_builder("ticket", TicketBuilder)
        ticket = registry.new_builder("ticket").set("summary", "Printer on fire").build()
        assert ticket == Ticket(summary="Printer on fire")
        assert "ticket" in registry.builder_kinds()
