"""Example audit client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAuditClient and register the provider in AuditClientFactory.
"""

import json
from typing import Any, ClassVar

from app.audit.client_base import BaseAuditClient
from app.extraction.models import Attachment


class ExampleClientAdapter(BaseAuditClient):
    """Example adapter that returns a fixed valid audit report.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "score": 72,
        "summary": "Example audit: the policy is broadly compliant with one leave gap.",
        "red_flags": [
            {
                "issue": "Annual leave is set below the statutory minimum.",
                "law": "BCEA Section 20",
                "impact": "High",
                "correction": "Grant at least 21 consecutive days of annual leave per cycle.",
            }
        ],
        "positive_findings": [
            {
                "finding": "Working hours are capped at 45 per week.",
                "law": "BCEA Section 9",
                "benefit": "Matches the statutory maximum for ordinary hours.",
            }
        ],
        "disclaimer": "Example output for development only. Not legal advice.",
    }

    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        instruction: str,
        json_schema: dict[str, Any],
        attachment: Attachment | None = None,
    ) -> str:
        _ = model, temperature, instruction, json_schema, attachment
        return json.dumps(self.DEFAULT_RESPONSE)
