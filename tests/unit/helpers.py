from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from app.parsing.models import Transaction, TransactionType


def make_db() -> tuple[MagicMock, MagicMock, MagicMock]:
    """A Database mock whose connection() yields `conn` and whose cursors are `cur`."""
    db = MagicMock()
    conn = MagicMock()
    cur = MagicMock()
    db.connection.return_value.__enter__.return_value = conn
    conn.cursor.return_value.__enter__.return_value = cur
    return db, conn, cur


def make_transaction(**overrides: object) -> Transaction:
    fields: dict[str, object] = {
        "owner_id": "owner-1",
        "transaction_id": "a" * 64,
        "date": "2025-01-15",
        "merchant": "SUPERMERCADO XYZ",
        "amount": Decimal("50000.00"),
        "amount_raw": "50.000,00",
        "type": TransactionType.DEBIT,
        "category": "SUPERMERCADOS",
        "source_document_id": "doc-1",
        "document_type": "visa",
        "raw_line": "15/01/2025 123456 SUPERMERCADO XYZ $50.000,00",
        "created_at": datetime(2025, 2, 1, tzinfo=timezone.utc),
        "auth_code": "123456",
    }
    fields.update(overrides)
    return Transaction(**fields)  # type: ignore[arg-type]
