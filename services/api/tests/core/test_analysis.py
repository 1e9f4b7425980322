"""Tests for parsing and validating raw model output."""

import json

import pytest
from pydantic import ValidationError

from services.api.src.incident_api.core.analysis import (
    AnalysisResult,
    parse_analysis,
    strip_code_fences,
)
from services.api.src.incident_api.core.errors import MalformedResponse, ValidationFailure
from services.api.src.incident_api.schemas.enums import Category, Severity


class TestStripCodeFences:
    def test_plain_text_unchanged(self):
        assert strip_code_fences('{"a": 1}') == '{"a": 1}'

    def test_trims_whitespace(self):
        assert strip_code_fences('  \n{"a": 1}\n  ') == '{"a": 1}'

    def test_generic_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_other_language_tag(self):
        assert strip_code_fences('```javascript\n{"a": 1}\n```') == '{"a": 1}'

    def test_only_leading_fence(self):
        assert strip_code_fences('```json\n{"a": 1}') == '{"a": 1}'

    def test_only_trailing_fence(self):
        assert strip_code_fences('{"a": 1}\n```') == '{"a": 1}'

    def test_idempotent(self):
        once = strip_code_fences('```json\n{"a": 1}\n```')
        assert strip_code_fences(once) == once


class TestParseAnalysis:
    def test_valid_payload(self, valid_payload):
        result = parse_analysis(json.dumps(valid_payload))
        assert result.severity == Severity.CRITICAL
        assert result.category == Category.DATABASE
        assert result.assigned_team == "Database Team"
        assert result.estimated_resolution_hours == 2
        assert result.confidence == 0.92

    def test_round_trip_matches_parsed_values(self, valid_payload):
        result = parse_analysis(json.dumps(valid_payload))
        assert result.model_dump(by_alias=True, mode="json") == valid_payload

    def test_fenced_payload_equals_unfenced(self, valid_payload):
        raw = json.dumps(valid_payload)
        assert parse_analysis(f"```json\n{raw}\n```") == parse_analysis(raw)
        assert parse_analysis(f"```\n{raw}\n```") == parse_analysis(raw)

    def test_extra_keys_ignored(self, valid_payload):
        valid_payload["reasoning"] = "pool exhausted"
        result = parse_analysis(json.dumps(valid_payload))
        assert result.severity == Severity.CRITICAL

    def test_zero_hours_and_confidence_bounds_accepted(self, valid_payload):
        valid_payload.update(estimatedResolutionHours=0, confidence=0.0)
        assert parse_analysis(json.dumps(valid_payload)).confidence == 0.0

        valid_payload["confidence"] = 1.0
        assert parse_analysis(json.dumps(valid_payload)).confidence == 1.0

    def test_hours_above_prompt_range_accepted(self, valid_payload):
        valid_payload["estimatedResolutionHours"] = 500
        assert parse_analysis(json.dumps(valid_payload)).estimated_resolution_hours == 500

    def test_integer_confidence_accepted(self, valid_payload):
        valid_payload["confidence"] = 1
        assert parse_analysis(json.dumps(valid_payload)).confidence == 1.0


class TestMalformedResponse:
    def test_prose_is_malformed(self):
        with pytest.raises(MalformedResponse) as exc_info:
            parse_analysis("This is not valid data")
        assert exc_info.value.raw_text == "This is not valid data"

    def test_empty_is_malformed(self):
        with pytest.raises(MalformedResponse):
            parse_analysis("")

    def test_json_array_is_malformed(self, valid_payload):
        with pytest.raises(MalformedResponse):
            parse_analysis(json.dumps([valid_payload]))

    def test_truncated_json_is_malformed(self, valid_payload):
        with pytest.raises(MalformedResponse):
            parse_analysis(json.dumps(valid_payload)[:-5])

    def test_raw_text_kept_unstripped(self):
        raw = "```json\nnot json\n```"
        with pytest.raises(MalformedResponse) as exc_info:
            parse_analysis(raw)
        assert exc_info.value.raw_text == raw

    @pytest.mark.parametrize("raw", [None, b'{"severity": "LOW"}', 42])
    def test_non_text_is_malformed(self, raw):
        with pytest.raises(MalformedResponse) as exc_info:
            parse_analysis(raw)
        assert exc_info.value.raw_text == repr(raw)
        assert exc_info.value.reason == "gateway returned non-text"


class TestValidationFailure:
    @pytest.mark.parametrize("field,value", [
        ("severity", "URGENT"),
        ("severity", "critical"),
        ("category", "HARDWARE"),
        ("assignedTeam", "   "),
        ("suggestedSolution", ""),
        ("estimatedResolutionHours", -1),
        ("confidence", 1.5),
        ("confidence", -0.1),
        ("confidence", True),
        ("confidence", "0.9"),
        ("estimatedResolutionHours", "5"),
        ("estimatedResolutionHours", 2.5),
        ("estimatedResolutionHours", False),
    ])
    def test_out_of_bounds_field(self, valid_payload, field, value):
        valid_payload[field] = value
        with pytest.raises(ValidationFailure) as exc_info:
            parse_analysis(json.dumps(valid_payload))
        assert exc_info.value.field == field

    @pytest.mark.parametrize("field", [
        "severity",
        "category",
        "assignedTeam",
        "suggestedSolution",
        "estimatedResolutionHours",
        "confidence",
    ])
    def test_missing_field(self, valid_payload, field):
        del valid_payload[field]
        with pytest.raises(ValidationFailure) as exc_info:
            parse_analysis(json.dumps(valid_payload))
        assert exc_info.value.field == field
        assert exc_info.value.reason == "is required"

    def test_null_field(self, valid_payload):
        valid_payload["assignedTeam"] = None
        with pytest.raises(ValidationFailure) as exc_info:
            parse_analysis(json.dumps(valid_payload))
        assert exc_info.value.field == "assignedTeam"

    def test_first_violation_reported(self, valid_payload):
        valid_payload["category"] = "HARDWARE"
        valid_payload["confidence"] = 7
        with pytest.raises(ValidationFailure) as exc_info:
            parse_analysis(json.dumps(valid_payload))
        assert exc_info.value.field == "category"

    def test_confidence_failure_names_field(self, valid_payload):
        valid_payload["confidence"] = 1.5
        with pytest.raises(ValidationFailure) as exc_info:
            parse_analysis(json.dumps(valid_payload))
        assert "confidence" in str(exc_info.value)


class TestAnalysisResult:
    def test_frozen(self, valid_payload):
        result = AnalysisResult.model_validate(valid_payload)
        with pytest.raises(ValidationError):
            result.confidence = 0.1

    def test_construct_by_field_name(self):
        result = AnalysisResult(
            severity=Severity.LOW,
            category=Category.FRONTEND,
            assigned_team="Frontend Team",
            suggested_solution="Fix the CSS.",
            estimated_resolution_hours=1,
            confidence=0.5,
        )
        assert result.assigned_team == "Frontend Team"
