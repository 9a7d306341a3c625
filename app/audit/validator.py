"""Validates raw model output and repairs it into an AuditReport.

Policy: be lenient and flag the repair. Out-of-range scores are clamped,
unknown impact levels become ``Medium`` and absent optional text is
defaulted, each recorded in ``ValidOutcome.repairs``. Only output that cannot
be turned into a report at all (not JSON, no score, no summary, wrong
container types) becomes an ``InvalidOutcome``.
"""

import json
import math
import re
from typing import Any

from app.audit.exceptions import ResponseParseError, SchemaViolation
from app.audit.models import (
    AuditOutcome,
    AuditReport,
    Impact,
    InvalidOutcome,
    ModelResponse,
    PositiveFinding,
    RedFlag,
    ValidOutcome,
)
from app.logging.logger import Log

DEFAULT_DISCLAIMER = (
    "This audit was generated automatically and is not legal advice. "
    "Have a qualified labour law practitioner review the findings before acting on them."
)

SCORE_MIN = 0
SCORE_MAX = 100
_MAX_ITEMS = 200
_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_IMPACTS = {impact.value.lower(): impact for impact in Impact}


def validate(response: ModelResponse) -> AuditOutcome:
    """Classify a model response as a valid (possibly repaired) or invalid outcome."""
    try:
        data = parse_response(response.raw_text)
    except ResponseParseError as exc:
        Log.warning(f"Model response rejected: {exc}")
        return InvalidOutcome(reason=str(exc), category=exc.category)

    repairs: list[str] = []
    try:
        report = build_report(data, repairs)
    except SchemaViolation as exc:
        Log.warning(f"Model response violates the report schema: {exc}")
        return InvalidOutcome(reason=str(exc), category=exc.category, partial=data)

    if repairs:
        Log.warning(f"Report repaired: {'; '.join(repairs)}")
    return ValidOutcome(report=report, repaired=bool(repairs), repairs=repairs)


def strip_artifacts(raw: str) -> str:
    """Remove Markdown code-fence markers and surrounding whitespace."""
    return _FENCE_RE.sub("", raw).strip()


def parse_response(raw: str) -> dict[str, Any]:
    """Parse model text into a JSON object.

    Raises:
        ResponseParseError: if no JSON object can be recovered.
    """
    cleaned = strip_artifacts(raw)
    if not cleaned:
        raise ResponseParseError("Model returned an empty response")
    try:
        parsed = _loads(cleaned)
    except (ValueError, RecursionError) as exc:
        parsed = _parse_outermost_object(cleaned, exc)

    if not isinstance(parsed, dict):
        raise ResponseParseError("JSON response must be an object")
    return parsed


def _loads(text: str) -> Any:
    # jsonb rejects NaN and Infinity, so they never reach a stored partial.
    return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)


def _reject_constant(name: str) -> Any:
    raise ResponseParseError(f"Invalid JSON response: non-finite number {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ResponseParseError(f"Invalid JSON response: number {literal} is out of range")
    return value


def _parse_outermost_object(text: str, error: Exception) -> Any:
    # Prose around the object ("Here is the audit: {...}") is common.
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise ResponseParseError(f"Invalid JSON response: {error}") from error
    try:
        return _loads(text[start : end + 1])
    except (ValueError, RecursionError):
        raise ResponseParseError(f"Invalid JSON response: {error}") from error


def build_report(data: dict[str, Any], repairs: list[str]) -> AuditReport:
    """Build an AuditReport, appending a description of every coercion to ``repairs``.

    Raises:
        SchemaViolation: when the data cannot be repaired.
    """
    score = _build_score(data.get("score"), repairs)
    summary = _build_summary(data.get("summary"))
    red_flags = [
        _build_red_flag(item, i, repairs)
        for i, item in enumerate(_require_list(data.get("red_flags"), "red_flags"))
    ]
    positive_findings = [
        _build_positive_finding(item, i, repairs)
        for i, item in enumerate(
            _require_list(data.get("positive_findings"), "positive_findings")
        )
    ]
    disclaimer = _build_disclaimer(data.get("disclaimer"), repairs)
    return AuditReport(
        score=score,
        summary=summary,
        red_flags=red_flags,
        positive_findings=positive_findings,
        disclaimer=disclaimer,
    )


def _build_score(raw: Any, repairs: list[str]) -> int:
    if isinstance(raw, bool) or raw is None:
        raise SchemaViolation("'score' must be a number")
    if isinstance(raw, str):
        try:
            value: float = float(raw.strip())
        except ValueError:
            raise SchemaViolation(f"'score' must be a number, got {raw!r}") from None
        repairs.append(f"score coerced from string {raw!r}")
    elif isinstance(raw, (int, float)):
        value = raw
    else:
        raise SchemaViolation(f"'score' must be a number, got {type(raw).__name__}")

    if isinstance(value, float):
        if not math.isfinite(value):
            raise SchemaViolation("'score' must be a finite number")
        if not value.is_integer():
            rounded = round(value)
            repairs.append(f"score rounded from {value} to {rounded}")
            value = rounded

    score = int(value)
    clamped = max(SCORE_MIN, min(SCORE_MAX, score))
    if clamped != score:
        repairs.append(f"score clamped from {score} to {clamped}")
    return clamped


def _build_summary(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise SchemaViolation("'summary' must be a non-empty string")
    return raw


def _require_list(raw: Any, field: str) -> list[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise SchemaViolation(f"'{field}' must be a list")
    if len(raw) > _MAX_ITEMS:
        raise SchemaViolation(f"Too many {field}: {len(raw)} (max {_MAX_ITEMS})")
    return raw


def _build_red_flag(raw: Any, index: int, repairs: list[str]) -> RedFlag:
    where = f"red_flags[{index}]"
    if not isinstance(raw, dict):
        raise SchemaViolation(f"{where} must be an object")
    return RedFlag(
        issue=_required_text(raw, "issue", where),
        law=_optional_text(raw, "law", where, repairs),
        impact=_build_impact(raw.get("impact"), where, repairs),
        correction=_optional_text(raw, "correction", where, repairs),
    )


def _build_positive_finding(raw: Any, index: int, repairs: list[str]) -> PositiveFinding:
    where = f"positive_findings[{index}]"
    if not isinstance(raw, dict):
        raise SchemaViolation(f"{where} must be an object")
    return PositiveFinding(
        finding=_required_text(raw, "finding", where),
        law=_optional_text(raw, "law", where, repairs),
        benefit=_optional_text(raw, "benefit", where, repairs),
    )


def _build_impact(raw: Any, where: str, repairs: list[str]) -> Impact:
    if isinstance(raw, str):
        impact = _IMPACTS.get(raw.strip().lower())
        if impact is not None:
            return impact
    repairs.append(f"{where}.impact {raw!r} coerced to {Impact.MEDIUM.value}")
    return Impact.MEDIUM


def _required_text(raw: dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise SchemaViolation(f"{where}: '{key}' must be a non-empty string")
    return value


def _optional_text(raw: dict[str, Any], key: str, where: str, repairs: list[str]) -> str:
    value = raw.get(key)
    if value is None:
        repairs.append(f"{where}.{key} missing, defaulted to empty")
        return ""
    if not isinstance(value, str):
        raise SchemaViolation(f"{where}: '{key}' must be a string")
    return value


def _build_disclaimer(raw: Any, repairs: list[str]) -> str:
    if isinstance(raw, str) and raw.strip():
        return raw
    repairs.append("disclaimer missing, standard disclaimer applied")
    return DEFAULT_DISCLAIMER
