import json
from pathlib import Path
from typing import Any

from lexigem.prompts.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent


def load_prompt_template(path: Path | None = None) -> str:
    """Load the document analysis prompt template.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled analysis_prompt.txt.

    Returns:
        The raw template string with a ``{response_language}`` placeholder.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_prompt.txt"
    return _read(path, "prompt template")


def load_chat_system_prompt(path: Path | None = None) -> str:
    """Load the chat system instruction template (bundled chat_system_prompt.txt)."""
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "chat_system_prompt.txt"
    return _read(path, "chat system prompt")


def load_json_schema(path: Path | None = None) -> dict[str, Any]:
    """Load and parse the analysis response schema.

    Raises:
        PromptLoadError: if the file cannot be read or is not a JSON object.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_schema.json"
    raw = _read(path, "JSON schema")
    try:
        schema = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PromptLoadError(f"Invalid JSON schema in {path}: {exc}") from exc
    if not isinstance(schema, dict):
        raise PromptLoadError(f"JSON schema in {path} must be an object")
    return schema


def _read(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load {what}: {exc}") from exc
