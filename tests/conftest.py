import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

STATEMENT_LINES = [
    "BANCO EJEMPLO - Extracto de tarjeta de credito",
    "Nuevos movimientos",
    "Número de autorización  Fecha de transacción  Descripción  Valor",
    "123456  15/01/2025  SUPERMERCADO XYZ  $ 50.000,00",
    "654321  16/01/2025  PAGO PSE BANCO  $ 200.000,00",
    "Total a pagar  $ 150.000,00",
]


def _pdf(lines: list[str], encrypt: str | None = None) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt=encrypt)
    y = 720
    for line in lines:
        c.drawString(72, y, line)
        y -= 18
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _pdf(["Hello PDF World"])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def statement_pdf_bytes() -> bytes:
    """A one-page card statement with two movements."""
    return _pdf(STATEMENT_LINES)


@pytest.fixture()
def encrypted_statement_pdf_bytes() -> bytes:
    """The same statement protected with the user password 'secreto'."""
    return _pdf(STATEMENT_LINES, encrypt="secreto")
