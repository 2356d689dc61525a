from typing import Any

from psycopg import sql
from psycopg.rows import dict_row

from app.database.connection import Database
from app.database.models import DocumentRecord
from app.status.models import IN_PROGRESS_STATUSES, DocumentStatus

# Columns a status transition may set besides the ones it stamps itself.
UPDATABLE_FIELDS = frozenset(
    {
        "filename",
        "size_bytes",
        "transactions_extracted",
        "processing_time_ms",
        "error_type",
        "error_message",
    }
)


def status_composite(owner_id: str, status: str) -> str:
    """Key used by owner + status range queries: '<owner_id>#<status>'."""
    return f"{owner_id}#{status}"


class DocumentStatusRepository:
    """Database operations for the document_uploads table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def update_status(
        self,
        owner_id: str,
        document_id: str,
        status: DocumentStatus,
        fields: dict[str, Any] | None = None,
    ) -> bool:
        """Apply a status transition as a single conditional UPDATE.

        Rows already COMPLETED are never touched.

        Returns:
            True if a row was updated, False if the document is missing or
            already completed.

        Raises:
            ValueError: if `fields` names a column outside UPDATABLE_FIELDS.
        """
        fields = fields or {}
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update document fields: {sorted(unknown)}")

        assignments = self._stamp_assignments(status)
        for column in fields:
            assignments[column] = sql.Placeholder(column)

        query = sql.SQL(
            """
            UPDATE document_uploads
            SET {assignments}
            WHERE owner_id = %(owner_id)s
              AND document_id = %(document_id)s
              AND status <> %(completed)s
            """
        ).format(
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = {}").format(sql.Identifier(column), value)
                for column, value in assignments.items()
            )
        )
        params: dict[str, Any] = {
            **fields,
            "status": str(status),
            "status_composite": status_composite(owner_id, status),
            "in_progress": [str(s) for s in IN_PROGRESS_STATUSES],
            "owner_id": owner_id,
            "document_id": document_id,
            "completed": str(DocumentStatus.COMPLETED),
        }
        with self._db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                updated = cur.rowcount > 0
            conn.commit()
        return updated

    def _stamp_assignments(self, status: DocumentStatus) -> dict[str, sql.Composable]:
        assignments: dict[str, sql.Composable] = {
            "status": sql.Placeholder("status"),
            "status_composite": sql.Placeholder("status_composite"),
            "updated_at": sql.SQL("NOW()"),
        }
        if status == DocumentStatus.PROCESSING:
            # A new attempt starts the clock again and clears the previous failure.
            assignments["processing_started_at"] = sql.SQL(
                "CASE WHEN status = ANY(%(in_progress)s) "
                "THEN COALESCE(processing_started_at, NOW()) ELSE NOW() END"
            )
            assignments["failed_at"] = sql.NULL
            assignments["error_type"] = sql.NULL
            assignments["error_message"] = sql.NULL
        elif status == DocumentStatus.COMPLETED:
            assignments["completed_at"] = sql.SQL("COALESCE(completed_at, NOW())")
        elif status in (DocumentStatus.FAILED, DocumentStatus.PASSWORD_ERROR):
            assignments["failed_at"] = sql.SQL("COALESCE(failed_at, NOW())")
        return assignments

    def find_by_id(self, owner_id: str, document_id: str) -> DocumentRecord | None:
        """Find a document by its composite key."""
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT owner_id, document_id, status, status_composite,
                           document_type, filename, has_password, size_bytes,
                           uploaded_at, updated_at, processing_started_at,
                           completed_at, failed_at, transactions_extracted,
                           processing_time_ms, error_type, error_message
                    FROM document_uploads
                    WHERE owner_id = %s AND document_id = %s
                    """,
                    (owner_id, document_id),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return DocumentRecord(**row)
