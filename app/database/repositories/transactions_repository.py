from datetime import date

from psycopg.rows import dict_row

from app.database.connection import Database
from app.parsing.models import Transaction, TransactionType


class TransactionsRepository:
    """Database operations for the transactions table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def insert_if_absent(self, transaction: Transaction) -> bool:
        """Insert a transaction unless (owner_id, transaction_id) already exists.

        Returns:
            True if the row was inserted, False if it was already stored.
        """
        with self._db.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO transactions
                    (owner_id, transaction_id, date, merchant, amount, amount_raw,
                     type, category, auth_code, source_document_id, document_type,
                     display_email, raw_line, created_at)
                    VALUES (%(owner_id)s, %(transaction_id)s, %(date)s, %(merchant)s,
                            %(amount)s, %(amount_raw)s, %(type)s, %(category)s,
                            %(auth_code)s, %(source_document_id)s, %(document_type)s,
                            %(display_email)s, %(raw_line)s, %(created_at)s)
                    ON CONFLICT (owner_id, transaction_id) DO NOTHING
                    """,
                    {
                        "owner_id": transaction.owner_id,
                        "transaction_id": transaction.transaction_id,
                        "date": transaction.date,
                        "merchant": transaction.merchant,
                        "amount": transaction.amount,
                        "amount_raw": transaction.amount_raw,
                        "type": str(transaction.type),
                        "category": transaction.category,
                        "auth_code": transaction.auth_code,
                        "source_document_id": transaction.source_document_id,
                        "document_type": transaction.document_type,
                        "display_email": transaction.display_email,
                        "raw_line": transaction.raw_line,
                        "created_at": transaction.created_at,
                    },
                )
                inserted = cur.rowcount == 1
            conn.commit()
        return inserted

    def find_by_owner(
        self,
        owner_id: str,
        date_from: date | None = None,
        date_to: date | None = None,
        limit: int = 100,
    ) -> list[Transaction]:
        """List an owner's transactions, newest first, within an inclusive date range."""
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT owner_id, transaction_id, date, merchant, amount, amount_raw,
                           type, category, auth_code, source_document_id, document_type,
                           display_email, raw_line, created_at
                    FROM transactions
                    WHERE owner_id = %(owner_id)s
                      AND (%(date_from)s::date IS NULL OR date >= %(date_from)s::date)
                      AND (%(date_to)s::date IS NULL OR date <= %(date_to)s::date)
                    ORDER BY date DESC, transaction_id
                    LIMIT %(limit)s
                    """,
                    {
                        "owner_id": owner_id,
                        "date_from": date_from,
                        "date_to": date_to,
                        "limit": limit,
                    },
                )
                rows = cur.fetchall()

        return [
            Transaction(
                owner_id=row["owner_id"],
                transaction_id=row["transaction_id"],
                date=row["date"].isoformat(),
                merchant=row["merchant"],
                amount=row["amount"],
                amount_raw=row["amount_raw"],
                type=TransactionType(row["type"]),
                category=row["category"],
                auth_code=row["auth_code"],
                source_document_id=row["source_document_id"],
                document_type=row["document_type"],
                display_email=row["display_email"],
                raw_line=row["raw_line"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
