"""Tests for the audit response validator and its repair policy."""

import json
from typing import Any

import pytest

from app.audit.exceptions import SchemaViolation
from app.audit.models import Impact, InvalidOutcome, ModelResponse, ValidOutcome
from app.audit.validator import (
    DEFAULT_DISCLAIMER,
    build_report,
    parse_response,
    strip_artifacts,
    validate,
)


def _response(data: Any) -> ModelResponse:
    raw = data if isinstance(data, str) else json.dumps(data)
    return ModelResponse(raw_text=raw)


def _valid(data: Any) -> ValidOutcome:
    outcome = validate(_response(data))
    assert isinstance(outcome, ValidOutcome)
    return outcome


def _invalid(data: Any) -> InvalidOutcome:
    outcome = validate(_response(data))
    assert isinstance(outcome, InvalidOutcome)
    return outcome


class TestPristineReport:
    def test_valid_report_is_not_repaired(self, valid_report_payload: dict[str, Any]) -> None:
        outcome = _valid(valid_report_payload)
        assert not outcome.repaired
        assert outcome.repairs == []
        assert outcome.report.score == 64
        assert outcome.report.red_flags[0].impact is Impact.HIGH
        assert outcome.report.positive_findings[0].law == "BCEA Section 9"

    def test_payload_round_trips_wire_shape(self, valid_report_payload: dict[str, Any]) -> None:
        assert _valid(valid_report_payload).report.to_payload() == valid_report_payload

    def test_missing_lists_default_to_empty_without_repair(self) -> None:
        outcome = _valid({"score": 90, "summary": "Fine.", "disclaimer": "d"})
        assert outcome.report.red_flags == []
        assert outcome.report.positive_findings == []
        assert not outcome.repaired

    def test_null_lists_default_to_empty_without_repair(self) -> None:
        outcome = _valid(
            {
                "score": 90,
                "summary": "Fine.",
                "red_flags": None,
                "positive_findings": None,
                "disclaimer": "d",
            }
        )
        assert outcome.report.red_flags == []
        assert not outcome.repaired

    def test_integral_float_score_is_not_a_repair(self) -> None:
        outcome = _valid({"score": 80.0, "summary": "s", "disclaimer": "d"})
        assert outcome.report.score == 80
        assert not outcome.repaired


class TestArtifactStripping:
    def test_strips_json_fence(self, valid_report_payload: dict[str, Any]) -> None:
        raw = "```json\n" + json.dumps(valid_report_payload) + "\n```"
        assert _valid(raw).report.score == 64

    def test_strips_plain_fence(self, valid_report_payload: dict[str, Any]) -> None:
        raw = "```\n" + json.dumps(valid_report_payload) + "\n```"
        assert _valid(raw).report.score == 64

    def test_recovers_object_surrounded_by_prose(
        self, valid_report_payload: dict[str, Any]
    ) -> None:
        raw = "Here is the audit:\n" + json.dumps(valid_report_payload) + "\nThanks."
        assert _valid(raw).report.score == 64

    def test_strip_artifacts_removes_whitespace(self) -> None:
        assert strip_artifacts("  ```json\n{}\n```  ") == "{}"


class TestParseFailures:
    def test_non_json_is_parse_error(self) -> None:
        outcome = _invalid("The policy looks fine to me.")
        assert outcome.category == "response_parse_error"
        assert outcome.partial is None

    def test_empty_response_is_parse_error(self) -> None:
        outcome = _invalid("")
        assert outcome.category == "response_parse_error"
        assert "empty" in outcome.reason

    def test_array_is_parse_error(self) -> None:
        outcome = _invalid("[]")
        assert outcome.category == "response_parse_error"
        assert "must be an object" in outcome.reason

    def test_parse_response_returns_dict(self) -> None:
        assert parse_response('{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e400"])
    def test_non_finite_number_is_parse_error(self, literal: str) -> None:
        outcome = _invalid('{"score": ' + literal + ', "summary": "s"}')
        assert outcome.category == "response_parse_error"
        assert outcome.partial is None

    def test_non_finite_number_inside_prose_is_parse_error(self) -> None:
        outcome = _invalid('Result: {"score": 50, "summary": "s", "x": NaN} done')
        assert outcome.category == "response_parse_error"


class TestScoreRepair:
    def test_score_above_range_is_clamped(self) -> None:
        outcome = _valid({"score": 150, "summary": "s", "disclaimer": "d"})
        assert outcome.report.score == 100
        assert outcome.repaired
        assert "score clamped from 150 to 100" in outcome.repairs

    def test_negative_score_is_clamped(self) -> None:
        outcome = _valid({"score": -5, "summary": "s", "disclaimer": "d"})
        assert outcome.report.score == 0
        assert outcome.repaired

    def test_huge_integer_score_is_clamped(self) -> None:
        outcome = _valid('{"score": ' + "9" * 400 + ', "summary": "s", "disclaimer": "d"}')
        assert outcome.report.score == 100
        assert outcome.repaired

    def test_huge_negative_integer_score_is_clamped(self) -> None:
        outcome = _valid('{"score": -' + "9" * 400 + ', "summary": "s", "disclaimer": "d"}')
        assert outcome.report.score == 0
        assert outcome.repaired

    def test_fractional_score_is_rounded(self) -> None:
        outcome = _valid({"score": 72.6, "summary": "s", "disclaimer": "d"})
        assert outcome.report.score == 73
        assert outcome.repaired

    def test_numeric_string_score_is_coerced(self) -> None:
        outcome = _valid({"score": " 55 ", "summary": "s", "disclaimer": "d"})
        assert outcome.report.score == 55
        assert outcome.repaired

    @pytest.mark.parametrize("score", [None, True, "high", [], {"v": 1}, "nan"])
    def test_unusable_score_is_schema_violation(self, score: Any) -> None:
        outcome = _invalid({"score": score, "summary": "s", "disclaimer": "d"})
        assert outcome.category == "schema_violation"
        assert outcome.partial is not None

    def test_missing_score_is_schema_violation(self) -> None:
        outcome = _invalid({"summary": "s"})
        assert outcome.category == "schema_violation"
        assert "score" in outcome.reason

    @pytest.mark.parametrize("score", [-1000, -1, 0, 37, 100, 101, 10**6, 99.4, 0.5])
    def test_score_always_within_range(self, score: float) -> None:
        outcome = _valid({"score": score, "summary": "s", "disclaimer": "d"})
        assert 0 <= outcome.report.score <= 100


class TestImpactRepair:
    def test_unknown_impact_coerced_to_medium(self) -> None:
        outcome = _valid(
            {
                "score": 40,
                "summary": "s",
                "red_flags": [{"issue": "i", "law": "l", "impact": "Critical", "correction": "c"}],
                "disclaimer": "d",
            }
        )
        assert outcome.report.red_flags[0].impact is Impact.MEDIUM
        assert outcome.repaired
        assert "red_flags[0].impact 'Critical' coerced to Medium" in outcome.repairs

    def test_case_insensitive_impact_is_accepted(self) -> None:
        outcome = _valid(
            {
                "score": 40,
                "summary": "s",
                "red_flags": [{"issue": "i", "law": "l", "impact": "low", "correction": "c"}],
                "disclaimer": "d",
            }
        )
        assert outcome.report.red_flags[0].impact is Impact.LOW
        assert not outcome.repaired

    def test_missing_impact_coerced_to_medium(self) -> None:
        outcome = _valid(
            {
                "score": 40,
                "summary": "s",
                "red_flags": [{"issue": "i", "law": "l", "correction": "c"}],
                "disclaimer": "d",
            }
        )
        assert outcome.report.red_flags[0].impact is Impact.MEDIUM
        assert outcome.repaired


class TestStructuralViolations:
    def test_empty_summary(self) -> None:
        assert _invalid({"score": 50, "summary": "  "}).category == "schema_violation"

    def test_red_flags_not_a_list(self) -> None:
        outcome = _invalid({"score": 50, "summary": "s", "red_flags": "none"})
        assert outcome.category == "schema_violation"
        assert "red_flags" in outcome.reason

    def test_element_not_an_object(self) -> None:
        outcome = _invalid({"score": 50, "summary": "s", "positive_findings": ["good"]})
        assert "positive_findings[0]" in outcome.reason

    def test_missing_issue(self) -> None:
        outcome = _invalid(
            {"score": 50, "summary": "s", "red_flags": [{"law": "l", "impact": "High"}]}
        )
        assert "issue" in outcome.reason

    def test_non_string_law(self) -> None:
        outcome = _invalid(
            {
                "score": 50,
                "summary": "s",
                "positive_findings": [{"finding": "f", "law": 20, "benefit": "b"}],
            }
        )
        assert "law" in outcome.reason

    def test_too_many_items(self) -> None:
        flags = [{"issue": f"i{n}", "law": "l", "impact": "Low", "correction": "c"} for n in range(201)]
        outcome = _invalid({"score": 50, "summary": "s", "red_flags": flags})
        assert "Too many red_flags" in outcome.reason

    def test_partial_keeps_parsed_object(self) -> None:
        data = {"score": 50, "summary": "", "red_flags": []}
        assert _invalid(data).partial == data


class TestOptionalTextRepair:
    def test_missing_disclaimer_gets_default(self) -> None:
        outcome = _valid({"score": 50, "summary": "s"})
        assert outcome.report.disclaimer == DEFAULT_DISCLAIMER
        assert outcome.repaired

    def test_null_correction_defaults_to_empty(self) -> None:
        outcome = _valid(
            {
                "score": 50,
                "summary": "s",
                "red_flags": [{"issue": "i", "law": "l", "impact": "High", "correction": None}],
                "disclaimer": "d",
            }
        )
        assert outcome.report.red_flags[0].correction == ""
        assert outcome.repaired


class TestBuildReport:
    def test_collects_every_repair(self) -> None:
        repairs: list[str] = []
        build_report(
            {
                "score": 120,
                "summary": "s",
                "red_flags": [{"issue": "i", "law": "l", "impact": "urgent", "correction": "c"}],
            },
            repairs,
        )
        assert len(repairs) == 3

    def test_raises_schema_violation(self) -> None:
        with pytest.raises(SchemaViolation):
            build_report({"score": 1}, [])
