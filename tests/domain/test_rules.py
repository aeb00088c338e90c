"""Tests for field rules, validators, and constraints."""

from __future__ import annotations

from typing import Any

import pytest

from guardedbuild.domain.rules import (
    FieldRule,
    Requirement,
    Verdict,
    at_least,
    at_least_one_of,
    each,
    instance_of,
    is_blank,
    matches,
    max_length,
    non_empty_text,
    one_of,
    optional,
    required,
)


class TestIsBlank:
    @pytest.mark.parametrize("value", [None, "", "  ", "\t\n"])
    def test_blank(self, value: Any) -> None:
        assert is_blank(value)

    @pytest.mark.parametrize("value", ["x", 0, False, (), [], {}])
    def test_not_blank(self, value: Any) -> None:
        """Falsy non-strings and empty collections are values."""
        assert not is_blank(value)


class TestFieldRule:
    def test_required_shorthand(self) -> None:
        rule = required("title", non_empty_text, description="Headline")
        assert rule.required
        assert rule.requirement == Requirement.REQUIRED
        assert not rule.has_default
        assert rule.description == "Headline"

    def test_optional_shorthand(self) -> None:
        rule = optional("summary", default=str)
        assert not rule.required
        assert rule.has_default
        assert rule.default is not None and rule.default() == ""

    def test_check_collects_every_failure(self) -> None:
        rule = FieldRule(name="code", validators=(non_empty_text, max_length(2), one_of("ab")))
        assert rule.check("xyz") == ["must be at most 2 characters", "must be one of: ab"]

    def test_check_passes(self) -> None:
        assert required("title", non_empty_text).check("ok") == []

    def test_frozen(self) -> None:
        rule = required("title")
        with pytest.raises(Exception):
            rule.name = "other"  # type: ignore[misc]


class TestValidators:
    def test_non_empty_text(self) -> None:
        assert non_empty_text("a").ok
        assert non_empty_text(" ") == Verdict.failed("must not be empty")
        assert non_empty_text(3) == Verdict.failed("must be text, got int")

    def test_max_length(self) -> None:
        check = max_length(3)
        assert check("abc").ok
        assert check(("a", "b", "c", "d")).reason == "must be at most 3 characters"
        assert check(12).reason == "must have a length, got int"

    def test_matches_requires_full_match(self) -> None:
        check = matches(r"\d{4}", "four digits")
        assert check("2026").ok
        assert check("20261") == Verdict.failed("must be four digits")
        assert check(2026) == Verdict.failed("must be four digits")

    def test_one_of(self) -> None:
        check = one_of("low", "high")
        assert check("low").ok
        assert check("mid").reason == "must be one of: low, high"

    def test_instance_of(self) -> None:
        check = instance_of(int, float)
        assert check(1.5).ok
        assert check("1").reason == "must be int or float, got str"

    def test_at_least(self) -> None:
        check = at_least(1)
        assert check(1).ok
        assert check(0).reason == "must be at least 1"
        assert check(True).reason == "must be a number, got bool"

    def test_each_reports_first_failing_item(self) -> None:
        check = each(non_empty_text)
        assert check(("a", "b")).ok
        assert check(()).ok
        assert check(("a", "", " ")).reason == "item 1 must not be empty"

    def test_each_rejects_plain_text(self) -> None:
        assert each(non_empty_text)("abc").reason == "must be a collection, got str"

    def test_verdict_passed_is_shared(self) -> None:
        assert Verdict.passed() is Verdict.passed()
        assert Verdict.passed().reason == ""


class TestAtLeastOneOf:
    def test_declared_fields(self) -> None:
        constraint = at_least_one_of("recipient", "email", "phone")
        assert constraint.name == "recipient"
        assert constraint.fields == ("email", "phone")
        assert constraint.description == "at least one of email or phone"

    def test_check(self) -> None:
        constraint = at_least_one_of("recipient", "email", "phone")
        assert constraint.check({"email": "a@b.c", "phone": None}).ok
        assert constraint.check({"email": None, "phone": "+15550100"}).ok
        verdict = constraint.check({"email": None, "phone": ""})
        assert verdict == Verdict.failed("at least one of email or phone is required")
