from collections.abc import Iterator
from functools import partial

import pymupdf

from lexigem.logging.logger import Log
from lexigem.pdf.base import BasePdfEngine, PageRenderer, is_password_error
from lexigem.pdf.exceptions import InvalidPasswordError, PdfRasterizationError


class PyMuPdfAdapter(BasePdfEngine):
    """Detects encryption and rasterizes pages using PyMuPDF."""

    def is_password_protected(self, pdf_bytes: bytes) -> bool:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    return True
                doc.load_page(0)
            return False
        except Exception as exc:
            if is_password_error(exc):
                return True
            Log.warning(f"pymupdf: unclear PDF error, assuming not password-protected: {exc}")
            return False

    def _iter_page_renderers(
        self, pdf_bytes: bytes, password: str
    ) -> Iterator[tuple[int, PageRenderer]]:
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise PdfRasterizationError(f"Failed to process PDF: {exc}") from exc

        with doc:
            if doc.needs_pass and not doc.authenticate(password):
                raise InvalidPasswordError("Incorrect password for PDF")
            matrix = pymupdf.Matrix(self._scale, self._scale)
            page_count = min(doc.page_count, self._max_pages)
            Log.debug(f"pymupdf: rendering {page_count} of {doc.page_count} page(s)")
            for index in range(page_count):
                yield index + 1, partial(self._render_page, doc, index, matrix)

    @staticmethod
    def _render_page(doc: pymupdf.Document, index: int, matrix: pymupdf.Matrix) -> bytes:
        page = doc.load_page(index)
        pixmap = page.get_pixmap(matrix=matrix, alpha=False)
        return pixmap.tobytes("png")
