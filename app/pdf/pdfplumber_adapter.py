import io

import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect

from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import PdfExtractionError, PdfPasswordError


def _is_password_failure(exc: BaseException) -> bool:
    # pdfplumber wraps pdfminer errors, so look through args and the cause chain.
    seen: set[int] = set()
    pending: list[object] = [exc]
    while pending:
        current = pending.pop()
        if not isinstance(current, BaseException) or id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, PDFPasswordIncorrect):
            return True
        pending.extend(current.args)
        pending.extend([current.__cause__, current.__context__])
    return False


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text in-process with pdfplumber's layout mode."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text(layout=True) or "" for page in pdf.pages]
            return "\n".join(page.rstrip() for page in pages).strip("\n")
        except PdfExtractionError:
            raise
        except Exception as exc:
            if _is_password_failure(exc):
                raise PdfPasswordError("pdfplumber: incorrect or missing password") from exc
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
