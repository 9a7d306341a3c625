from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.extraction.models import Attachment
from app.processor.models import MediaType


class Impact(str, Enum):
    """Closed severity taxonomy for red flags."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class RedFlag:
    """A clause that breaches the legal context."""

    issue: str
    law: str
    impact: Impact
    correction: str


@dataclass(frozen=True)
class PositiveFinding:
    """A clause that meets or exceeds the legal requirement."""

    finding: str
    law: str
    benefit: str


@dataclass(frozen=True)
class AuditReport:
    """Validated compliance report."""

    score: int
    summary: str
    red_flags: list[RedFlag] = field(default_factory=list)
    positive_findings: list[PositiveFinding] = field(default_factory=list)
    disclaimer: str = ""

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict in the wire shape the model was asked for."""
        return {
            "score": self.score,
            "summary": self.summary,
            "red_flags": [
                {
                    "issue": f.issue,
                    "law": f.law,
                    "impact": f.impact.value,
                    "correction": f.correction,
                }
                for f in self.red_flags
            ],
            "positive_findings": [
                {"finding": p.finding, "law": p.law, "benefit": p.benefit}
                for p in self.positive_findings
            ],
            "disclaimer": self.disclaimer,
        }


@dataclass(frozen=True)
class AuditPrompt:
    """Instruction payload for one audit; never persisted."""

    instruction: str
    schema_contract: dict[str, Any]
    source_format: MediaType
    attachment: Attachment | None = None


@dataclass(frozen=True)
class ModelResponse:
    """Raw model output, opaque until validated."""

    raw_text: str
    retries: int = 0


@dataclass(frozen=True)
class ValidOutcome:
    """The response produced a usable report, possibly after coercions."""

    report: AuditReport
    repaired: bool = False
    repairs: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class InvalidOutcome:
    """No usable report could be obtained.

    ``partial`` holds whatever object was parsed from the response, if any,
    so a failed record still shows what the model returned.
    """

    reason: str
    category: str
    partial: dict[str, Any] | None = None


AuditOutcome = ValidOutcome | InvalidOutcome
