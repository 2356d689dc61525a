from psycopg.rows import dict_row

from app.database.connection import Database
from app.database.models import CredentialRecord


class CredentialsRepository:
    """Database operations for the document_credentials table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def find(self, owner_id: str, document_type: str) -> CredentialRecord | None:
        """Find the stored password for an owner and document type."""
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT owner_id, document_type, password, updated_at
                    FROM document_credentials
                    WHERE owner_id = %s AND document_type = %s
                    """,
                    (owner_id, document_type),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return CredentialRecord(**row)

    def save_password(self, owner_id: str, document_type: str, password: str) -> None:
        """Store a password for an owner and document type. Last write wins."""
        with self._db.connection() as conn:
            conn.execute(
                """
                INSERT INTO document_credentials (owner_id, document_type, password, updated_at)
                VALUES (%s, %s, %s, NOW())
                ON CONFLICT (owner_id, document_type)
                DO UPDATE SET password = EXCLUDED.password, updated_at = NOW()
                """,
                (owner_id, document_type, password),
            )
            conn.commit()
