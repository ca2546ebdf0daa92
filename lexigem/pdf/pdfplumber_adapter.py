import io
from collections.abc import Iterator
from functools import partial

import pdfplumber
from pdfplumber.page import Page

from lexigem.logging.logger import Log
from lexigem.pdf.base import BasePdfEngine, PageRenderer, is_password_error
from lexigem.pdf.exceptions import InvalidPasswordError, PdfRasterizationError

_PDF_POINTS_PER_INCH = 72


class PdfPlumberAdapter(BasePdfEngine):
    """Detects encryption with pdfminer and rasterizes pages with pypdfium2 via pdfplumber."""

    def is_password_protected(self, pdf_bytes: bytes) -> bool:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                _ = pdf.pages[0]
            return False
        except Exception as exc:
            if is_password_error(exc):
                return True
            Log.warning(
                f"pdfplumber: unclear PDF error, assuming not password-protected: {exc!r}"
            )
            return False

    def _iter_page_renderers(
        self, pdf_bytes: bytes, password: str
    ) -> Iterator[tuple[int, PageRenderer]]:
        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes), password=password)
        except Exception as exc:
            if not is_password_error(exc):
                raise PdfRasterizationError(f"Failed to process PDF: {exc!r}") from exc
            # owner-password-only documents open with an empty user password
            try:
                pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
            except Exception:
                raise InvalidPasswordError("Incorrect password for PDF") from exc
            Log.debug("pdfplumber: document opens without a password, ignoring the given one")

        with pdf:
            try:
                pages = pdf.pages[: self._max_pages]
            except Exception as exc:
                raise PdfRasterizationError(f"Failed to read PDF pages: {exc!r}") from exc
            resolution = round(_PDF_POINTS_PER_INCH * self._scale)
            for index, page in enumerate(pages):
                yield index + 1, partial(self._render_page, page, resolution)

    @staticmethod
    def _render_page(page: Page, resolution: int) -> bytes:
        image = page.to_image(resolution=resolution).original
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
