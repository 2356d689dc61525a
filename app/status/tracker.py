from typing import Any

from app.database.models import DocumentRecord
from app.database.repositories.document_status_repository import DocumentStatusRepository
from app.logging.logger import Log
from app.status.models import DocumentStatus, FailureKind


class StatusTracker:
    """Records pipeline progress on the document row for external observers.

    Every write is best-effort: a failure to record status is logged and
    swallowed so it can never abort the processing it describes.
    """

    def __init__(self, repository: DocumentStatusRepository) -> None:
        self._repository = repository

    def advance(
        self,
        owner_id: str,
        document_id: str,
        status: DocumentStatus,
        **fields: Any,
    ) -> bool:
        """Move a document to `status`, setting any extra columns in `fields`.

        Returns:
            True if the row was updated. False if the document is missing,
            already COMPLETED, or the write failed.
        """
        if not owner_id or not document_id:
            Log.error("Status update skipped: owner_id and document_id are required")
            return False
        try:
            updated = self._repository.update_status(owner_id, document_id, status, fields)
        except Exception as exc:
            Log.error(
                f"Failed to record status {status} for document {document_id}: {exc}"
            )
            return False

        if not updated:
            Log.warning(
                f"Status {status} not recorded for document {document_id}: "
                "document missing or already completed"
            )
            return False
        Log.info(f"Document {document_id} status -> {status}")
        return True

    def mark_failed(
        self,
        owner_id: str,
        document_id: str,
        kind: FailureKind,
        message: str,
    ) -> bool:
        return self.advance(
            owner_id,
            document_id,
            DocumentStatus.FAILED,
            error_type=str(kind),
            error_message=message,
        )

    def mark_password_error(
        self,
        owner_id: str,
        document_id: str,
        message: str,
        kind: FailureKind = FailureKind.PASSWORD_INCORRECT,
    ) -> bool:
        return self.advance(
            owner_id,
            document_id,
            DocumentStatus.PASSWORD_ERROR,
            error_type=str(kind),
            error_message=message,
        )

    def mark_completed(
        self,
        owner_id: str,
        document_id: str,
        transactions_extracted: int,
        processing_time_ms: int,
    ) -> bool:
        return self.advance(
            owner_id,
            document_id,
            DocumentStatus.COMPLETED,
            transactions_extracted=transactions_extracted,
            processing_time_ms=processing_time_ms,
        )

    def get_document(self, owner_id: str, document_id: str) -> DocumentRecord | None:
        """Read the current status record. Returns None if unavailable."""
        try:
            return self._repository.find_by_id(owner_id, document_id)
        except Exception as exc:
            Log.error(f"Failed to read status of document {document_id}: {exc}")
            return None
