from dataclasses import dataclass

from app.database.repositories.transactions_repository import TransactionsRepository
from app.logging.logger import Log
from app.parsing.models import Transaction


class PersistenceError(Exception):
    """Raised when a batch could not be stored at all."""


@dataclass(frozen=True)
class SaveResult:
    saved: int = 0
    duplicates: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.saved + self.duplicates + self.errors


class TransactionStore:
    """Stores parsed transactions so that replaying a document is harmless.

    Each item is an insert-if-absent on (owner_id, transaction_id); an item
    that already exists is a duplicate, not an error. A failing item does
    not stop the batch.
    """

    def __init__(self, repository: TransactionsRepository) -> None:
        self._repository = repository

    def save(self, transactions: list[Transaction]) -> SaveResult:
        """Insert each transaction once.

        Raises:
            PersistenceError: if every item of a non-empty batch failed.
        """
        saved = duplicates = errors = 0
        for transaction in transactions:
            try:
                inserted = self._repository.insert_if_absent(transaction)
            except Exception as exc:
                errors += 1
                Log.error(f"Failed to store transaction {transaction.transaction_id}: {exc}")
                continue
            if inserted:
                saved += 1
            else:
                duplicates += 1
                Log.debug(f"Transaction {transaction.transaction_id} already stored")

        result = SaveResult(saved=saved, duplicates=duplicates, errors=errors)
        Log.info(f"Stored transactions: {saved} saved, {duplicates} duplicates, {errors} errors")
        if transactions and errors == len(transactions):
            raise PersistenceError(f"All {errors} transactions failed to store")
        return result
