class AnalysisError(Exception):
    """Base exception for document analysis failures.

    ``str(exc)`` carries diagnostic detail for logs; ``user_message`` is the
    fixed text that may be shown to end users.
    """

    user_message = (
        "Failed to analyze the document. The AI model could not process the request. "
        "Please ensure you've uploaded a clear document (PDF, DOCX, PNG, JPG)."
    )


class ServiceUnavailableError(AnalysisError):
    """Raised when model credentials are missing or rejected."""

    user_message = "The analysis service is temporarily unavailable. Please try again later."


class RateLimitedError(AnalysisError):
    """Raised when the provider is still rate limiting after all retries."""

    user_message = (
        "Model quota/rate limit reached. Retried automatically; "
        "please try again in a moment."
    )


class UnsupportedMediaError(AnalysisError):
    """Raised when the provider rejects the file's MIME type or encoding."""

    user_message = "Unsupported file type. Please upload PDF, DOCX, PNG, or JPG."


class PasswordProtectedOrCorruptError(AnalysisError):
    """Raised when the provider could not read any page of the document."""

    user_message = (
        "The document appears to be password-protected or corrupted. "
        "If it is protected, please enter the password when prompted."
    )


class AnalysisFailedError(AnalysisError):
    """Catch-all for provider, parsing and validation failures."""


class AnalysisResponseError(AnalysisFailedError):
    """Raised when the model response is not valid JSON or misses required fields."""


class DocumentValidationError(AnalysisFailedError):
    """Raised when the input files are rejected before any network call."""

    user_message = "One or more files are empty or invalid."
