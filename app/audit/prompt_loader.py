import json
from pathlib import Path
from typing import Any

from app.audit.exceptions import AuditError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the audit instruction template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled audit_prompt.txt.

    Returns:
        The raw template string with ``{legal_context}`` and ``{json_schema}``
        placeholders.

    Raises:
        AuditError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "audit_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AuditError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> dict[str, Any]:
    """Load the report JSON schema the model must conform to.

    Raises:
        AuditError: if the file cannot be read or is not a JSON object.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "audit_schema.json"
    try:
        schema = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise AuditError(f"Failed to load JSON schema: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise AuditError(f"JSON schema is not valid JSON: {exc}") from exc
    if not isinstance(schema, dict):
        raise AuditError("JSON schema must be an object")
    return schema
