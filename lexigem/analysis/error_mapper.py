"""Single place where raw provider failures become user-facing analysis errors."""

import re

from lexigem.analysis.exceptions import (
    AnalysisError,
    AnalysisFailedError,
    PasswordProtectedOrCorruptError,
    RateLimitedError,
    ServiceUnavailableError,
    UnsupportedMediaError,
)

_RATE_LIMIT_RE = re.compile(
    r"quota|rate[ _-]?limit|\b429\b|resource[ _-]?exhausted|too many requests",
    re.IGNORECASE,
)
_CREDENTIALS_RE = re.compile(
    r"api[ _-]?key|unauthenticated|invalid authentication|permission[ _-]?denied",
    re.IGNORECASE,
)
_UNSUPPORTED_MEDIA_RE = re.compile(r"unsupported|mime", re.IGNORECASE)
_UNREADABLE_DOCUMENT_RE = re.compile(r"no pages", re.IGNORECASE)


def _status_code(exc: BaseException) -> int | None:
    code = getattr(exc, "status_code", None)
    return code if isinstance(code, int) else None


def is_rate_limited(exc: BaseException) -> bool:
    """True when the failure looks like provider throttling or quota exhaustion."""
    if isinstance(exc, RateLimitedError) or _status_code(exc) == 429:
        return True
    return bool(_RATE_LIMIT_RE.search(str(exc)))


def map_provider_error(exc: BaseException) -> AnalysisError:
    """Translate any failure from a model call into the analysis taxonomy.

    Already-classified AnalysisError instances are returned unchanged.
    """
    if isinstance(exc, AnalysisError):
        return exc
    message = str(exc)
    status = _status_code(exc)
    if status in (401, 403):
        return ServiceUnavailableError(message)
    # checked before the credentials pattern: a 429 that mentions a key is still throttling
    if is_rate_limited(exc):
        return RateLimitedError(message)
    if _CREDENTIALS_RE.search(message):
        return ServiceUnavailableError(message)
    if status == 415 or _UNSUPPORTED_MEDIA_RE.search(message):
        return UnsupportedMediaError(message)
    if _UNREADABLE_DOCUMENT_RE.search(message):
        return PasswordProtectedOrCorruptError(message)
    return AnalysisFailedError(message)
