from collections.abc import Iterator

import pytest

from lexigem.pdf.base import BasePdfEngine, PageRenderer, is_password_error
from lexigem.pdf.exceptions import InvalidPasswordError, PdfRasterizationError


class _StubEngine(BasePdfEngine):
    def __init__(self, renderers: list[PageRenderer], **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self._renderers = renderers

    def is_password_protected(self, pdf_bytes: bytes) -> bool:
        return True

    def _iter_page_renderers(
        self, pdf_bytes: bytes, password: str
    ) -> Iterator[tuple[int, PageRenderer]]:
        for index, render in enumerate(self._renderers[: self._max_pages]):
            yield index + 1, render


def _fail() -> bytes:
    raise RuntimeError("render failed")


class TestConvertToImages:
    def test_skips_failed_and_empty_pages(self) -> None:
        engine = _StubEngine([lambda: b"one", _fail, lambda: b"", lambda: b"four"])
        pages = engine.convert_to_images(b"%PDF", "pw")
        assert [(p.page_number, p.content) for p in pages] == [(1, b"one"), (4, b"four")]

    def test_no_rendered_page_raises(self) -> None:
        engine = _StubEngine([_fail, lambda: b""])
        with pytest.raises(PdfRasterizationError, match="Failed to convert PDF pages"):
            engine.convert_to_images(b"%PDF", "pw")

    def test_empty_password_is_rejected_before_opening(self) -> None:
        engine = _StubEngine([lambda: b"never"])
        with pytest.raises(InvalidPasswordError):
            engine.convert_to_images(b"%PDF", "")

    def test_max_pages_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            _StubEngine([], max_pages=0)


class TestIsPasswordError:
    def test_matches_message(self) -> None:
        assert is_password_error(RuntimeError("document is encrypted"))

    def test_matches_class_name(self) -> None:
        class PDFPasswordIncorrect(Exception):
            pass

        assert is_password_error(PDFPasswordIncorrect())

    def test_follows_cause(self) -> None:
        try:
            try:
                raise ValueError("needs pass")
            except ValueError as inner:
                raise RuntimeError("open failed") from inner
        except RuntimeError as exc:
            assert is_password_error(exc)

    def test_unrelated_error(self) -> None:
        assert not is_password_error(ValueError("syntax error at byte 12"))
