from app.parsing.exceptions import ParsingError
from app.pdf.exceptions import PdfExtractionError, PdfPasswordError
from app.persistence.transaction_store import PersistenceError
from app.processor.exceptions import NoTransactionsFoundError
from app.status.models import FailureKind


def classify_failure(exc: BaseException, password_supplied: bool) -> FailureKind:
    """Map a pipeline exception to the failure kind recorded on the document."""
    if isinstance(exc, PdfPasswordError):
        if password_supplied:
            return FailureKind.PASSWORD_INCORRECT
        return FailureKind.PASSWORD_MISSING
    if isinstance(exc, PdfExtractionError):
        return FailureKind.EXTRACTION_FAILED
    if isinstance(exc, NoTransactionsFoundError):
        return FailureKind.NO_TRANSACTIONS_FOUND
    if isinstance(exc, ParsingError):
        return FailureKind.PARSING_FAILED
    if isinstance(exc, PersistenceError):
        return FailureKind.PERSISTENCE_ERROR
    return FailureKind.UNKNOWN
