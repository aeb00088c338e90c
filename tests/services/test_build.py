"""Tests for BuildService."""

from __future__ import annotations

from guardedbuild.services.build import BuildService
from guardedbuild.services.result import ErrorCode


class TestBuild:
    def test_success(self) -> None:
        result = BuildService().build("report", {"title": "Monthly Report"})
        assert result.ok, result.error
        assert result.op == "build_report"
        assert result.data["title"] == "Monthly Report"
        assert result.data["summary"] == ""
        assert result.data["tags"] == []
        assert isinstance(result.data["created_at"], str)

    def test_validation_failure_lists_problems(self) -> None:
        result = BuildService().build("notification", {"message": "hi"})
        assert not result.ok
        assert result.error is not None
        assert result.error.code == ErrorCode.VALIDATION_FAILED
        assert result.error.message == "1 problem(s) found"
        assert result.error.detail["problems"] == [
            {
                "field": "recipient",
                "kind": "constraint_violation",
                "reason": "at least one of email or phone is required",
            }
        ]
        assert result.error.detail["by_field"] == {
            "recipient": ["at least one of email or phone is required"]
        }

    def test_unknown_kind(self) -> None:
        result = BuildService().build("invoice", {})
        assert result.error is not None
        assert result.error.code == ErrorCode.UNKNOWN_BUILDER
        assert result.error.detail["available"] == ["notification", "report"]

    def test_unknown_field(self) -> None:
        result = BuildService().build("report", {"title": "T", "colour": "red"})
        assert result.error is not None
        assert result.error.code == ErrorCode.UNKNOWN_FIELD
        assert result.error.detail["field"] == "colour"
        assert result.error.detail["source"] == "input"


class TestPresets:
    def test_preset_fills_unset_fields(self) -> None:
        service = BuildService(presets={"report": {"author": "ops-team"}})
        result = service.build("report", {"title": "T"})
        assert result.data["author"] == "ops-team"

    def test_input_overrides_preset(self) -> None:
        service = BuildService(presets={"report": {"author": "ops-team"}})
        result = service.build("report", {"title": "T", "author": "alice"})
        assert result.data["author"] == "alice"

    def test_presets_for_other_kinds_ignored(self) -> None:
        service = BuildService(presets={"notification": {"priority": "high"}})
        assert service.build("report", {"title": "T"}).ok

    def test_bad_preset_field(self) -> None:
        service = BuildService(presets={"report": {"owner": "x"}})
        result = service.build("report", {"title": "T"})
        assert result.error is not None
        assert result.error.detail["source"] == "preset"


class TestDescribe:
    def test_report_fields(self) -> None:
        result = BuildService().describe("report")
        assert result.ok
        names = [f["name"] for f in result.data["fields"]]
        assert names == ["title", "summary", "author", "period", "tags", "created_at"]
        title = result.data["fields"][0]
        assert title["requirement"] == "required"
        assert title["has_default"] is False
        assert result.data["constraints"] == []
        assert result.data["model"] == "Report"

    def test_notification_constraints(self) -> None:
        result = BuildService().describe("notification")
        assert result.data["constraints"] == [
            {
                "name": "recipient",
                "fields": ["email", "phone"],
                "description": "at least one of email or phone",
            }
        ]

    def test_unknown_kind(self) -> None:
        result = BuildService().describe("invoice")
        assert result.error is not None
        assert result.error.code == ErrorCode.UNKNOWN_BUILDER


class TestKinds:
    def test_lists_builtins(self) -> None:
        result = BuildService().kinds()
        assert result.data == {
            "count": 2,
            "items": [
                {"kind": "notification", "model": "Notification"},
                {"kind": "report", "model": "Report"},
            ],
        }
