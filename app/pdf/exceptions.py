# Diagnostic fragments that mean "wrong or missing password". Matching tool
# output text is fragile: it depends on qpdf/poppler wording, so keep this
# list in sync with the tool versions shipped in the image.
PASSWORD_DIAGNOSTIC_PATTERNS: tuple[str, ...] = (
    "password",
    "contraseña",
)


def is_password_diagnostic(text: str) -> bool:
    lowered = text.lower()
    return any(pattern in lowered for pattern in PASSWORD_DIAGNOSTIC_PATTERNS)


class PdfExtractionError(Exception):
    """Raised when a PDF cannot be decrypted or turned into text."""


class PdfPasswordError(PdfExtractionError):
    """Raised when the PDF is encrypted and the password is wrong or absent."""
