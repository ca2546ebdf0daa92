class DocumentLoadError(Exception):
    """Base exception for documents rejected before analysis."""

    user_message = "The document could not be loaded."


class UnsupportedFileTypeError(DocumentLoadError):
    """Raised when the file's MIME type is not accepted for analysis."""

    user_message = "Unsupported file type. Please upload PDF, DOCX, PNG, or JPG."


class FileTooLargeError(DocumentLoadError):
    """Raised when the file exceeds the configured upload size."""

    user_message = "File too large. Please upload a smaller file."


class EmptyFileError(DocumentLoadError):
    """Raised when the file contains no bytes."""

    user_message = "The selected file is empty."
