"""AI-powered legal document analyzer."""

import json
import re
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from lexigem.analysis.error_mapper import is_rate_limited, map_provider_error
from lexigem.analysis.exceptions import (
    AnalysisError,
    AnalysisResponseError,
    DocumentValidationError,
    ServiceUnavailableError,
)
from lexigem.analysis.models import AnalysisResult
from lexigem.analysis.validator import validate_and_build
from lexigem.documents.models import UploadedFile
from lexigem.llm.client_base import BaseModelClient
from lexigem.logging.logger import Log
from lexigem.prompts.loader import load_json_schema, load_prompt_template

_CODE_FENCE_RE = re.compile(r"^```[A-Za-z]*\s*|\s*```$")


class DocumentAnalyzer:
    """Sends a document to the model and returns its structured analysis.

    Rate-limited calls are retried with exponential backoff
    (``backoff_seconds * 2**attempt``) up to ``max_attempts`` attempts in
    total. Any other failure propagates on first occurrence.
    """

    def __init__(
        self,
        *,
        client: BaseModelClient,
        model: str,
        temperature: float = 0.2,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._sleep = sleep
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = load_json_schema(json_schema_path)

    def analyze_document(
        self,
        files: UploadedFile | Sequence[UploadedFile],
        response_language: str = "English",
    ) -> AnalysisResult:
        """Analyze one file, or the ordered page images of a rasterized PDF.

        Raises:
            DocumentValidationError: for an empty file list or an empty file.
            AnalysisError: any other failure, already classified.
        """
        parts = self._validate_files(files)
        Log.info(f"Processing {len(parts)} file(s) for analysis")
        prompt = self._build_prompt(response_language)
        Log.debug(f"Analysis prompt:\n{prompt}")

        try:
            raw_response = self._call_with_retry(prompt, parts)
            Log.debug(f"AI raw response:\n{raw_response}")
            result = validate_and_build(self._parse_json(raw_response))
        except Exception as exc:
            error = map_provider_error(exc)
            self._log_failure(error)
            if error is exc:
                raise
            raise error from exc

        Log.info(
            f"Analysis complete: {len(result.pros)} pros, {len(result.cons)} cons, "
            f"{len(result.potential_loopholes)} loopholes, "
            f"{len(result.potential_challenges)} challenges"
        )
        return result

    @staticmethod
    def _validate_files(files: UploadedFile | Sequence[UploadedFile]) -> list[UploadedFile]:
        parts = [files] if isinstance(files, UploadedFile) else list(files)
        if not parts:
            raise DocumentValidationError("No files provided for analysis")
        for part in parts:
            if part.size == 0:
                raise DocumentValidationError(f"File '{part.name}' is empty")
        return parts

    def _build_prompt(self, response_language: str) -> str:
        return self._prompt_template.format(response_language=response_language)

    def _call_with_retry(self, prompt: str, parts: list[UploadedFile]) -> str:
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._client.generate_json(
                    model=self._model,
                    temperature=self._temperature,
                    prompt=prompt,
                    parts=parts,
                    json_schema=self._json_schema,
                )
            except Exception as exc:
                if not is_rate_limited(exc) or attempt >= self._max_attempts:
                    raise
                delay = self._backoff_seconds * 2 ** (attempt - 1)
                Log.warning(
                    f"Rate limited on attempt {attempt}/{self._max_attempts}, "
                    f"retrying in {delay:g}s"
                )
                self._sleep(delay)

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = _CODE_FENCE_RE.sub("", raw.strip())

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise AnalysisResponseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise AnalysisResponseError("JSON response must be an object")
        return parsed

    @staticmethod
    def _log_failure(error: AnalysisError) -> None:
        if isinstance(error, ServiceUnavailableError):
            Log.error(f"Analysis service unavailable, check model configuration: {error}")
        else:
            Log.error(f"Error analyzing document: {type(error).__name__}: {error}")
