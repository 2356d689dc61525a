from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract layout-preserving text from unencrypted PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Extracted text as a single line-delimited string, columns aligned
            with whitespace.

        Raises:
            PdfPasswordError: if the PDF is still encrypted.
            PdfExtractionError: if extraction fails for any other reason.
        """
