import json
from pathlib import Path

from app.audit.models import AuditPrompt
from app.audit.prompt_loader import load_json_schema, load_prompt_template
from app.context.models import LegalContext
from app.extraction.models import ExtractionResult

_NO_CONTEXT = "(No reference material is available for this audit.)"


class PromptComposer:
    """Builds the single instruction block sent to the reasoning service."""

    def __init__(
        self,
        *,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._template = load_prompt_template(prompt_template_path)
        self._schema = load_json_schema(json_schema_path)
        self._schema_text = json.dumps(self._schema, indent=2)

    def compose(self, context: LegalContext, extraction: ExtractionResult) -> AuditPrompt:
        instruction = self._template.format(
            legal_context=context.text if not context.is_empty else _NO_CONTEXT,
            json_schema=self._schema_text,
        )
        if extraction.attachment is None:
            instruction = f"DOCUMENT TO AUDIT\n{extraction.text}\n\n{instruction}"
        return AuditPrompt(
            instruction=instruction,
            schema_contract=self._schema,
            source_format=extraction.source_format,
            attachment=extraction.attachment,
        )
