import pytest

from app.pdf.exceptions import PdfExtractionError, PdfPasswordError
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter


class TestPdfPlumberAdapter:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(sample_pdf_bytes)
        assert isinstance(result, str)
        assert "Hello" in result
        assert "World" in result

    def test_extract_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(multi_page_pdf_bytes)
        assert "Page one" in result
        assert "Page two" in result

    def test_extract_empty_pdf_returns_empty_string(self, empty_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(empty_pdf_bytes)
        assert result == ""

    def test_extract_raises_on_invalid_bytes(self) -> None:
        adapter = PdfPlumberAdapter()
        with pytest.raises(PdfExtractionError):
            adapter.extract(b"not a pdf")

    def test_lines_have_no_trailing_padding(self, statement_pdf_bytes: bytes) -> None:
        adapter = PdfPlumberAdapter()
        result = adapter.extract(statement_pdf_bytes)
        assert all(line == line.rstrip() for line in result.splitlines())

    def test_encrypted_pdf_raises_password_error(
        self, encrypted_statement_pdf_bytes: bytes
    ) -> None:
        adapter = PdfPlumberAdapter()
        with pytest.raises(PdfPasswordError):
            adapter.extract(encrypted_statement_pdf_bytes)
