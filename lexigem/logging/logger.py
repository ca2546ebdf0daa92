import logging
import sys
from typing import ClassVar, TextIO

_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Log:
    """Class-level logging facade for the lexigem core.

    Passwords and API keys must never be passed to any of these methods.
    """

    _logger: logging.Logger = logging.getLogger("lexigem")
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Set the level and route records to ``stream`` (stdout by default).

        Calling it again swaps the handler installed by the previous call,
        so the CLI can send logs to stderr and keep stdout for results.
        Handlers added by other code are left alone.
        """
        cls._logger.setLevel(log_level.upper())
        if cls._handler is not None:
            cls._logger.removeHandler(cls._handler)
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        cls._logger.addHandler(handler)
        cls._handler = handler

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Prompts, raw model output, per-page render details."""
        cls._logger.debug(message, extra=kwargs)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        """Counts and outcomes of each pipeline step."""
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Recoverable trouble: skipped pages, retries, best-effort cleanup failures."""
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        """Failures surfaced to the caller, such as provider or configuration errors."""
        cls._logger.error(message, extra=kwargs)
