class PdfError(Exception):
    """Base exception for PDF preprocessing failures."""

    user_message = "Failed to process the PDF."


class InvalidPasswordError(PdfError):
    """Raised when the supplied password does not open the document.

    Callers should prompt for the password again rather than abort.
    """

    user_message = "Invalid password. Please check your password and try again."


class PasswordRequiredError(PdfError):
    """Raised when a protected PDF is processed and no password is supplied."""

    user_message = "This PDF is password-protected. Please enter its password to continue."


class PdfRasterizationError(PdfError):
    """Raised when the document cannot be opened or no page could be rendered."""
