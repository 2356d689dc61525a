from decimal import Decimal

from app.parsing.categories import DEFAULT_CATEGORY
from app.parsing.models import ParseContext, TransactionType
from app.parsing.parser import UNKNOWN_MERCHANT, TransactionParser


def _make_context(**overrides: object) -> ParseContext:
    fields: dict[str, object] = {
        "source_document_id": "doc-1",
        "owner_id": "owner-1",
        "document_type": "visa",
        "display_email": "user@example.com",
    }
    fields.update(overrides)
    return ParseContext(**fields)  # type: ignore[arg-type]


def _parse(text: str, **overrides: object):
    return TransactionParser().parse(text, _make_context(**overrides))


class TestTransactionParserEndToEnd:
    def test_single_supermarket_line(self) -> None:
        text = "Movimientos\n15/01/2025 123456 SUPERMERCADO XYZ $50.000,00\n"

        result = _parse(text)

        assert len(result) == 1
        tx = result[0]
        assert tx.date == "2025-01-15"
        assert tx.merchant == "SUPERMERCADO XYZ"
        assert tx.amount == Decimal("50000.00")
        assert tx.amount_raw == "50.000,00"
        assert tx.type == TransactionType.DEBIT
        assert tx.category == "SUPERMERCADOS"
        assert tx.source_document_id == "doc-1"
        assert tx.owner_id == "owner-1"
        assert tx.document_type == "visa"
        assert tx.display_email == "user@example.com"

    def test_compact_line_between_markers(self) -> None:
        text = (
            "Movimientos\n"
            "15/01/2025 123456SUPERMERCADO XYZ$50.000,00\n"
            "Total a pagar $50.000,00\n"
        )

        result = _parse(text)

        assert len(result) == 1
        assert result[0].merchant == "SUPERMERCADO XYZ"
        assert result[0].auth_code == "123456"
        assert result[0].amount == Decimal("50000.00")
        assert result[0].category == "SUPERMERCADOS"

    def test_auth_code_after_date_is_extracted(self) -> None:
        text = "Movimientos\n987654  16/01/2025  FARMACIA CENTRAL  $ 12.300,00\n"

        tx = _parse(text)[0]

        assert tx.auth_code == "987654"
        assert tx.merchant == "FARMACIA CENTRAL"
        assert tx.category == "SALUD"

    def test_short_leading_number_is_not_auth_code(self) -> None:
        text = "Movimientos\n15/01/2025 12 CINE COLOMBIA $ 30.000\n"

        tx = _parse(text)[0]

        assert tx.auth_code is None
        assert tx.merchant == "12 CINE COLOMBIA"

    def test_payment_is_credit(self) -> None:
        text = "Movimientos\n20/01/2025 PAGO PSE BANCO $ 200.000,00\n"

        tx = _parse(text)[0]

        assert tx.type == TransactionType.CREDIT
        assert tx.signed_amount == Decimal("200000.00")

    def test_debit_has_negative_signed_amount(self) -> None:
        tx = _parse("Movimientos\n15/01/2025 UBER TRIP $ 18.500\n")[0]

        assert tx.signed_amount == Decimal("-18500.00")

    def test_unknown_merchant_gets_default_category(self) -> None:
        tx = _parse("Movimientos\n15/01/2025 ZZZ QQQ $ 1.000\n")[0]

        assert tx.category == DEFAULT_CATEGORY

    def test_empty_merchant_is_unknown(self) -> None:
        tx = _parse("Movimientos\n15/01/2025 123456 $ 1.000\n")[0]

        assert tx.merchant == UNKNOWN_MERCHANT
        assert tx.auth_code == "123456"

    def test_first_amount_token_is_used(self) -> None:
        tx = _parse("Movimientos\n15/01/2025 AMAZON $ 100.000,00 $ 1.000,00\n")[0]

        assert tx.amount == Decimal("100000.00")

    def test_raw_line_is_kept(self) -> None:
        tx = _parse("Movimientos\n   15/01/2025 AMAZON $ 10,00   \n")[0]

        assert tx.raw_line == "15/01/2025 AMAZON $ 10,00"


class TestTransactionParserSections:
    def test_lines_outside_section_are_ignored(self) -> None:
        text = (
            "15/01/2025 OUTSIDE SHOP $ 1.000\n"
            "Movimientos\n"
            "16/01/2025 INSIDE SHOP $ 2.000\n"
        )

        result = _parse(text)

        assert [tx.merchant for tx in result] == ["INSIDE SHOP"]

    def test_end_marker_closes_section(self) -> None:
        text = (
            "Nuevos movimientos\n"
            "15/01/2025 EXITO CALLE 10 $ 5.000\n"
            "Resumen de tu cuenta\n"
            "16/01/2025 AFTER END $ 9.000\n"
        )

        result = _parse(text)

        assert [tx.merchant for tx in result] == ["EXITO CALLE 10"]

    def test_end_marker_line_is_considered_before_closing(self) -> None:
        text = "Movimientos\n17/01/2025 CARGO Total a pagar $ 7.000\n"

        result = _parse(text)

        assert len(result) == 1

    def test_authorization_header_opens_section(self) -> None:
        text = (
            "Número de autorización   Fecha   Descripción   Valor\n"
            "123456 15/01/2025 NETFLIX $ 38.900\n"
        )

        result = _parse(text)

        assert result[0].category == "TECNOLOGIA"

    def test_section_can_reopen(self) -> None:
        text = (
            "Movements\n"
            "01/02/2025 FIRST $ 1.00\n"
            "Account summary\n"
            "Transactions\n"
            "02/02/2025 SECOND $ 2.00\n"
            "Total due\n"
        )

        result = _parse(text)

        assert [tx.merchant for tx in result] == ["FIRST", "SECOND"]

    def test_invalid_date_skips_line(self) -> None:
        text = "Movimientos\n31/02/2025 BAD DATE $ 1.000\n01/03/2025 GOOD DATE $ 1.000\n"

        result = _parse(text)

        assert [tx.merchant for tx in result] == ["GOOD DATE"]

    def test_oversized_amount_is_zero_not_an_error(self) -> None:
        text = "Movimientos\n15/01/2025 SHOP $" + "9" * 30 + "\n"

        result = _parse(text)

        assert len(result) == 1
        assert result[0].amount == Decimal("0.00")

    def test_lines_without_amount_are_skipped(self) -> None:
        text = "Movimientos\n15/01/2025 NO AMOUNT HERE\n"

        assert _parse(text) == []

    def test_no_section_returns_empty_list(self) -> None:
        assert _parse("just some text\n15/01/2025 SHOP $ 1.000\n") == []

    def test_empty_text(self) -> None:
        assert _parse("") == []


class TestTransactionIdentity:
    TEXT = "Movimientos\n15/01/2025 123456 SUPERMERCADO XYZ $50.000,00\n"

    def test_same_input_gives_same_id(self) -> None:
        first = _parse(self.TEXT)[0]
        second = _parse(self.TEXT)[0]

        assert first.transaction_id == second.transaction_id

    def test_different_source_documents_give_different_ids(self) -> None:
        first = _parse(self.TEXT, source_document_id="doc-1")[0]
        second = _parse(self.TEXT, source_document_id="doc-2")[0]

        assert first.transaction_id != second.transaction_id

    def test_different_owners_give_different_ids(self) -> None:
        first = _parse(self.TEXT, owner_id="owner-1")[0]
        second = _parse(self.TEXT, owner_id="owner-2")[0]

        assert first.transaction_id != second.transaction_id

    def test_record_is_flat_and_serializable(self) -> None:
        record = _parse(self.TEXT)[0].to_record()

        assert record["amount"] == "50000.00"
        assert record["type"] == "DEBIT"
        assert record["authCode"] == "123456"
        assert isinstance(record["createdAt"], str)
