"""Unit tests for fee estimation and payment metadata."""

import pytest

from invoice_gocardless.drivers.pricing import FEE_CAP, calculate_fee, extract_metadata
from invoice_gocardless.models import Invoice


class TestCalculateFee:
    """Tests for the 1%-capped fee estimate."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (0, 0),
            (1, 1),
            (100, 1),
            (150, 2),
            (1000, 10),
            (1001, 11),
            (19999, 200),
            (20000, 200),
            (25000, 200),
            (10_000_000, 200),
        ],
    )
    def test_fee(self, amount: int, expected: int) -> None:
        assert calculate_fee(amount) == expected

    def test_fee_never_exceeds_cap(self) -> None:
        assert all(calculate_fee(amount) <= FEE_CAP for amount in range(0, 50000, 37))


class TestExtractMetadata:
    """Tests for metadata sent with GoCardless payments."""

    @pytest.fixture
    def invoice(self) -> Invoice:
        return Invoice(id=7, ref="INV-7")

    def test_invoice_fields_come_first(self, invoice: Invoice) -> None:
        metadata = extract_metadata(invoice)

        assert metadata == {"invoiceId": "7", "invoiceRef": "INV-7"}

    def test_keeps_first_three_entries_in_order(self, invoice: Invoice) -> None:
        metadata = extract_metadata(invoice, {"a": "x", "b": "y", "c": "z", "d": "w"})

        assert metadata == {"invoiceId": "7", "invoiceRef": "INV-7", "a": "x"}
        assert list(metadata) == ["invoiceId", "invoiceRef", "a"]

    def test_truncates_keys_and_values(self, invoice: Invoice) -> None:
        long_key = "k" * 80
        long_value = "v" * 900

        metadata = extract_metadata(invoice, {long_key: long_value})

        assert "k" * 50 in metadata
        assert len(metadata["k" * 50]) == 500

    def test_values_are_stringified(self, invoice: Invoice) -> None:
        metadata = extract_metadata(invoice, {"count": 3})

        assert metadata["count"] == "3"

    def test_none_values_become_empty_strings(self, invoice: Invoice) -> None:
        metadata = extract_metadata(invoice, {"note": None})

        assert metadata["note"] == ""

    def test_caller_can_override_invoice_fields_in_place(self, invoice: Invoice) -> None:
        metadata = extract_metadata(invoice, {"invoiceRef": "CUSTOM", "extra": "1", "more": "2"})

        assert metadata == {"invoiceId": "7", "invoiceRef": "CUSTOM", "extra": "1"}
