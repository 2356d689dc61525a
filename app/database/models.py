from dataclasses import dataclass
from datetime import datetime


@dataclass
class DocumentRecord:
    """Represents a row from the document_uploads table."""

    owner_id: str
    document_id: str
    status: str
    status_composite: str
    document_type: str = "default"
    filename: str | None = None
    has_password: bool = False
    size_bytes: int | None = None
    uploaded_at: datetime | None = None
    updated_at: datetime | None = None
    processing_started_at: datetime | None = None
    completed_at: datetime | None = None
    failed_at: datetime | None = None
    transactions_extracted: int | None = None
    processing_time_ms: int | None = None
    error_type: str | None = None
    error_message: str | None = None


@dataclass
class CredentialRecord:
    """Represents a row from the document_credentials table."""

    owner_id: str
    document_type: str
    password: str
    updated_at: datetime | None = None
