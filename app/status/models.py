from enum import StrEnum


class DocumentStatus(StrEnum):
    """Lifecycle states of an uploaded document."""

    UPLOADED = "UPLOADED"
    PROCESSING = "PROCESSING"
    DECRYPTING = "DECRYPTING"
    EXTRACTING_TEXT = "EXTRACTING_TEXT"
    PARSING = "PARSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    PASSWORD_ERROR = "PASSWORD_ERROR"
    RETRY_PENDING = "RETRY_PENDING"


class FailureKind(StrEnum):
    """Closed classification of why a document failed to process."""

    PASSWORD_INCORRECT = "PASSWORD_INCORRECT"
    PASSWORD_MISSING = "PASSWORD_MISSING"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    PARSING_FAILED = "PARSING_FAILED"
    NO_TRANSACTIONS_FOUND = "NO_TRANSACTIONS_FOUND"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    UNKNOWN = "UNKNOWN"


IN_PROGRESS_STATUSES = frozenset(
    {
        DocumentStatus.PROCESSING,
        DocumentStatus.DECRYPTING,
        DocumentStatus.EXTRACTING_TEXT,
        DocumentStatus.PARSING,
    }
)

FINAL_STATUSES = frozenset(
    {
        DocumentStatus.COMPLETED,
        DocumentStatus.FAILED,
        DocumentStatus.PASSWORD_ERROR,
    }
)

RETRYABLE_STATUSES = frozenset(
    {
        DocumentStatus.FAILED,
        DocumentStatus.PASSWORD_ERROR,
        DocumentStatus.RETRY_PENDING,
    }
)

PASSWORD_FAILURES = frozenset({FailureKind.PASSWORD_INCORRECT, FailureKind.PASSWORD_MISSING})

_STATUS_MESSAGES: dict[DocumentStatus, str] = {
    DocumentStatus.UPLOADED: "Document uploaded",
    DocumentStatus.PROCESSING: "Processing document...",
    DocumentStatus.DECRYPTING: "Unlocking protected PDF...",
    DocumentStatus.EXTRACTING_TEXT: "Extracting text...",
    DocumentStatus.PARSING: "Parsing transactions...",
    DocumentStatus.COMPLETED: "Processing completed",
    DocumentStatus.FAILED: "Document could not be processed",
    DocumentStatus.PASSWORD_ERROR: "Incorrect or missing password",
    DocumentStatus.RETRY_PENDING: "Waiting for retry",
}


def can_retry(status: str) -> bool:
    return status in RETRYABLE_STATUSES


def is_processing(status: str) -> bool:
    return status in IN_PROGRESS_STATUSES


def is_final(status: str) -> bool:
    return status in FINAL_STATUSES


def status_message(status: str) -> str:
    """Human-readable description of a status, for API consumers."""
    try:
        return _STATUS_MESSAGES[DocumentStatus(status)]
    except ValueError:
        return "Unknown status"
