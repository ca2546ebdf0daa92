from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator

from lexigem.logging.logger import Log
from lexigem.pdf.exceptions import InvalidPasswordError, PdfRasterizationError
from lexigem.pdf.models import RasterPage

_PASSWORD_MARKERS = ("password", "encrypted", "needs pass")

PageRenderer = Callable[[], bytes]


def is_password_error(exc: BaseException) -> bool:
    """Return True when ``exc`` or anything it wraps signals a password problem.

    Looks at exception class names and messages through ``__cause__``,
    ``__context__`` and exception instances stored in ``args``.
    """
    seen: set[int] = set()
    pending: list[BaseException] = [exc]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        name = type(current).__name__.lower()
        message = str(current).lower()
        if "password" in name or any(marker in message for marker in _PASSWORD_MARKERS):
            return True
        pending.extend(arg for arg in current.args if isinstance(arg, BaseException))
        if current.__cause__ is not None:
            pending.append(current.__cause__)
        if current.__context__ is not None:
            pending.append(current.__context__)
    return False


class BasePdfEngine(ABC):
    """Contract for PDF encryption detection and page rasterization adapters.

    Subclasses implement the two engine-specific hooks; the page cap, the
    skip-on-failure rule and the empty-output check live here.
    """

    DEFAULT_MAX_PAGES = 10
    DEFAULT_SCALE = 2.0

    def __init__(self, max_pages: int = DEFAULT_MAX_PAGES, scale: float = DEFAULT_SCALE) -> None:
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        self._max_pages = max_pages
        self._scale = scale

    @property
    def engine_name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def is_password_protected(self, pdf_bytes: bytes) -> bool:
        """Probe whether the PDF needs a password to open its first page.

        Never raises. Unclassified failures return False so the caller
        attempts the normal analysis flow.
        """

    def convert_to_images(self, pdf_bytes: bytes, password: str) -> list[RasterPage]:
        """Decrypt the PDF and render up to ``max_pages`` pages as PNG images.

        Args:
            pdf_bytes: Raw PDF file content.
            password: Password to open the document. Ignored when the
                document is not encrypted.

        Returns:
            Rendered pages in document order, at least one.

        Raises:
            InvalidPasswordError: if the password is empty or wrong.
            PdfRasterizationError: if the document cannot be opened or no
                page renders.
        """
        if not password:
            raise InvalidPasswordError("Password must not be empty")

        pages: list[RasterPage] = []
        for page_number, render in self._iter_page_renderers(pdf_bytes, password):
            try:
                content = render()
            except Exception as exc:
                Log.warning(f"{self.engine_name}: failed to render page {page_number}: {exc}")
                continue
            if not content:
                Log.warning(f"{self.engine_name}: page {page_number} produced an empty image")
                continue
            pages.append(RasterPage(page_number=page_number, content=content))
            Log.debug(f"Converted page {page_number} to image, size: {len(content)} bytes")

        if not pages:
            raise PdfRasterizationError("Failed to convert PDF pages to images")
        Log.info(f"{self.engine_name}: rendered {len(pages)} page(s)")
        return pages

    @abstractmethod
    def _iter_page_renderers(
        self, pdf_bytes: bytes, password: str
    ) -> Iterator[tuple[int, PageRenderer]]:
        """Open and authenticate the document, then yield one renderer per page.

        Must raise InvalidPasswordError or PdfRasterizationError before the
        first yield when the document cannot be opened, so a failed
        decryption never produces pages.
        """
