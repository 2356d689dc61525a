from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum


class TransactionType(StrEnum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


@dataclass(frozen=True)
class ParseContext:
    """Identifies the document whose text is being parsed."""

    source_document_id: str
    owner_id: str
    document_type: str = "default"
    display_email: str | None = None


@dataclass(frozen=True)
class Transaction:
    """One statement line-item, identified by a content hash."""

    owner_id: str
    transaction_id: str
    date: str  # ISO 8601, YYYY-MM-DD
    merchant: str
    amount: Decimal  # magnitude as printed on the statement
    amount_raw: str
    type: TransactionType
    category: str
    source_document_id: str
    document_type: str
    raw_line: str
    created_at: datetime
    auth_code: str | None = None
    display_email: str | None = None

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the ledger sign convention: debits negative, credits positive."""
        return -self.amount if self.type == TransactionType.DEBIT else self.amount

    def to_record(self) -> dict[str, object]:
        """Flat JSON-serializable representation."""
        return {
            "ownerId": self.owner_id,
            "transactionId": self.transaction_id,
            "date": self.date,
            "merchant": self.merchant,
            "amount": str(self.amount),
            "amountRaw": self.amount_raw,
            "type": str(self.type),
            "category": self.category,
            "authCode": self.auth_code,
            "sourceDocumentId": self.source_document_id,
            "documentType": self.document_type,
            "displayEmail": self.display_email,
            "rawLine": self.raw_line,
            "createdAt": self.created_at.isoformat(),
        }
