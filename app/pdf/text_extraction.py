from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor
from app.pdf.decryptor import QpdfDecryptor


class TextExtractionEngine:
    """Decrypt-then-extract: the single entry point from PDF bytes to text."""

    def __init__(self, decryptor: QpdfDecryptor, extractor: BasePdfExtractor) -> None:
        self._decryptor = decryptor
        self._extractor = extractor

    def extract(self, document_bytes: bytes, password: str | None = None) -> str:
        """Return layout-preserving text for a (possibly encrypted) PDF.

        Without a password the bytes go straight to the extractor; an
        encrypted document then fails with PdfPasswordError.

        Raises:
            PdfPasswordError: wrong or missing password.
            PdfExtractionError: decryption or extraction failed otherwise.
        """
        pdf_bytes = document_bytes
        if password:
            pdf_bytes = self._decryptor.decrypt(document_bytes, password)
        text = self._extractor.extract(pdf_bytes)
        Log.debug(f"Text extraction produced {len(text.splitlines())} lines")
        return text
