class PromptLoadError(Exception):
    """Raised when a bundled prompt template or schema cannot be read."""
