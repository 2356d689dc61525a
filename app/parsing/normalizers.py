"""Field normalization for statement lines: amounts, dates, identity hashes."""

import hashlib
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

_ZERO = Decimal("0.00")
_CENTS = Decimal("0.01")

# "1.234.567" with no decimal part: dots are thousands separators.
_DOT_GROUPED = re.compile(r"^\d{1,3}(\.\d{3})+$")
# "1,234,567" with no decimal part: commas are thousands separators.
_COMMA_GROUPED = re.compile(r"^\d{1,3}(,\d{3})+$")

HASH_SEPARATOR = "|"


def parse_amount(raw: str) -> Decimal:
    """Convert a printed amount to a Decimal with two places.

    Both grouping styles are accepted: "123.456,78" -> 123456.78 and
    "1,234.56" -> 1234.56. When both separators appear, the last one is the
    decimal mark. Malformed input yields 0.
    """
    text = raw.strip().replace(" ", "")
    if not text:
        return _ZERO

    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            normalized = text.replace(".", "").replace(",", ".")
        else:
            normalized = text.replace(",", "")
    elif "," in text:
        normalized = text.replace(",", "") if _COMMA_GROUPED.match(text) else text.replace(",", ".")
    elif "." in text:
        normalized = text.replace(".", "") if _DOT_GROUPED.match(text) else text
    else:
        normalized = text

    try:
        value = Decimal(normalized)
        if not value.is_finite():
            return _ZERO
        # Values beyond the context precision cannot be quantized.
        return value.quantize(_CENTS)
    except InvalidOperation:
        return _ZERO


def to_iso_date(raw: str) -> str | None:
    """Convert DD/MM/YYYY to YYYY-MM-DD. Returns None for impossible dates."""
    try:
        return datetime.strptime(raw, "%d/%m/%Y").date().isoformat()
    except ValueError:
        return None


def transaction_hash(
    owner_id: str,
    date: str,
    amount: Decimal,
    merchant: str,
    auth_code: str | None,
    source_document_id: str,
) -> str:
    """SHA-256 identity of a transaction. Same inputs always give the same id."""
    payload = HASH_SEPARATOR.join(
        [owner_id, date, str(amount), merchant, auth_code or "", source_document_id]
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
