import re
from datetime import datetime, timezone
from enum import Enum

from app.logging.logger import Log
from app.parsing.categories import categorize, infer_type
from app.parsing.models import ParseContext, Transaction
from app.parsing.normalizers import parse_amount, to_iso_date, transaction_hash

SECTION_START_MARKERS: tuple[str, ...] = (
    "Nuevos movimientos",
    "Movimientos",
    "Movements",
    "Transactions",
)
SECTION_END_MARKERS: tuple[str, ...] = (
    "En casos de inconsistencias",
    "Resumen de tu cuenta",
    "Total a pagar",
    "Account summary",
    "Total due",
)
UNKNOWN_MERCHANT = "DESCONOCIDO"

_DATE = re.compile(r"(\d{2}/\d{2}/\d{4})")
_AMOUNT = re.compile(r"\$\s*(\d[\d.,]*)")
_AUTH_CODE = re.compile(r"^(\d{6,})")
_WHITESPACE = re.compile(r"\s+")


class ScanState(Enum):
    OUTSIDE_SECTION = "outside"
    IN_SECTION = "in_section"


class TransactionParser:
    """Permissive line scanner for card and bank statement text.

    Statement layouts are noisy, so this is not a grammar: lines are only
    considered between a section-start heading and a section-end heading, and
    a line is a transaction when it carries a DD/MM/YYYY date and at least one
    "$" amount. Everything else is skipped silently.
    """

    def __init__(
        self,
        start_markers: tuple[str, ...] = SECTION_START_MARKERS,
        end_markers: tuple[str, ...] = SECTION_END_MARKERS,
    ) -> None:
        self._start_markers = start_markers
        self._end_markers = end_markers

    def parse(self, text: str, context: ParseContext) -> list[Transaction]:
        """Extract transactions from layout-preserved statement text.

        Returns an empty list when nothing matches; deciding whether that is
        a failure belongs to the caller.
        """
        transactions: list[Transaction] = []
        state = ScanState.OUTSIDE_SECTION
        created_at = datetime.now(timezone.utc)

        for number, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()

            if self._is_section_start(line):
                state = ScanState.IN_SECTION
                Log.debug(f"Transaction section starts at line {number}")
                continue

            if state is ScanState.IN_SECTION and line:
                transaction = self._parse_line(line, context, created_at)
                if transaction is not None:
                    transactions.append(transaction)

            if self._is_section_end(line):
                state = ScanState.OUTSIDE_SECTION

        credits = sum(1 for t in transactions if t.type == "CREDIT")
        Log.info(
            f"Parsed {len(transactions)} transactions from document "
            f"{context.source_document_id} ({len(transactions) - credits} debits, "
            f"{credits} credits)"
        )
        return transactions

    def _is_section_start(self, line: str) -> bool:
        if any(marker in line for marker in self._start_markers):
            return True
        return "Número de" in line and "autorización" in line

    def _is_section_end(self, line: str) -> bool:
        return any(marker in line for marker in self._end_markers)

    def _parse_line(
        self,
        line: str,
        context: ParseContext,
        created_at: datetime,
    ) -> Transaction | None:
        date_match = _DATE.search(line)
        amount_match = _AMOUNT.search(line)
        if date_match is None or amount_match is None:
            return None

        iso_date = to_iso_date(date_match.group(1))
        if iso_date is None:
            Log.debug(f"Skipping line with invalid date: {line!r}")
            return None

        merchant = line.split("$", 1)[0].replace(date_match.group(1), "", 1).strip()
        auth_code = None
        auth_match = _AUTH_CODE.match(merchant)
        if auth_match:
            auth_code = auth_match.group(1)
            merchant = merchant[len(auth_code):]
        merchant = _WHITESPACE.sub(" ", merchant).strip() or UNKNOWN_MERCHANT

        amount_raw = amount_match.group(1).rstrip(".,")
        amount = parse_amount(amount_raw)

        return Transaction(
            owner_id=context.owner_id,
            transaction_id=transaction_hash(
                context.owner_id,
                iso_date,
                amount,
                merchant,
                auth_code,
                context.source_document_id,
            ),
            date=iso_date,
            merchant=merchant,
            amount=amount,
            amount_raw=amount_raw,
            type=infer_type(merchant),
            category=categorize(merchant),
            source_document_id=context.source_document_id,
            document_type=context.document_type,
            raw_line=line,
            created_at=created_at,
            auth_code=auth_code,
            display_email=context.display_email,
        )
