import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.lib.pdfencrypt import StandardEncryption
from reportlab.pdfgen import canvas

PDF_PASSWORD = "secret"


def _build_pdf(page_count: int, encrypt: str | StandardEncryption | None = None) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt=encrypt)
    for number in range(1, page_count + 1):
        c.drawString(72, 720, f"Agreement page {number}")
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF."""
    return _build_pdf(1)


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF."""
    return _build_pdf(2)


@pytest.fixture()
def twelve_page_pdf_bytes() -> bytes:
    """Generate a PDF longer than the default rasterization cap."""
    return _build_pdf(12)


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    """Generate a two-page PDF protected with PDF_PASSWORD."""
    return _build_pdf(2, encrypt=PDF_PASSWORD)


@pytest.fixture()
def encrypted_twelve_page_pdf_bytes() -> bytes:
    return _build_pdf(12, encrypt=PDF_PASSWORD)


@pytest.fixture()
def pdf_password() -> str:
    return PDF_PASSWORD


@pytest.fixture()
def owner_only_pdf_bytes() -> bytes:
    """Generate a PDF with permissions set by an owner password and no user password."""
    return _build_pdf(2, encrypt=StandardEncryption("", ownerPassword="owner", canModify=0))
