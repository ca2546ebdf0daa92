class ModelProviderError(Exception):
    """Raised by provider adapters when the remote model call fails.

    Carries the provider's message and, when known, its HTTP status code.
    Classification into user-facing errors happens in the analysis layer.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmptyModelResponseError(ModelProviderError):
    """Raised when the provider returns no usable text."""
