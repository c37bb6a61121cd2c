"""Fee estimation and payment metadata shaping for GoCardless payments."""

from collections.abc import Mapping
from typing import Any

from invoice_gocardless.models import Invoice

# GoCardless charges 1% of the transaction, rounded up, capped at 200 minor units.
# There is no API to read the fee, so it is computed here.
FEE_PERCENT = 1
FEE_CAP = 200

# GoCardless accepts up to 3 metadata pairs, keys up to 50 and values up to 500 characters
METADATA_MAX_ENTRIES = 3
METADATA_MAX_KEY_LENGTH = 50
METADATA_MAX_VALUE_LENGTH = 500


def calculate_fee(amount: int) -> int:
    """
    Estimate the fee GoCardless will take for a payment.

    Args:
        amount: Payment amount in minor units

    Returns:
        Fee in the same minor unit, e.g. 1000 -> 10, 150 -> 2, 25000 -> 200
    """
    fee = -(-amount * FEE_PERCENT // 100)
    return min(fee, FEE_CAP)


def extract_metadata(invoice: Invoice, metadata: Mapping[str, Any] | None = None) -> dict[str, str]:
    """
    Build the metadata sent with a payment.

    The invoice ID and reference come first, followed by any caller
    metadata; only the first three entries survive. In practice that leaves
    room for one custom key.
    """
    merged: dict[str, Any] = {
        "invoiceId": invoice.id,
        "invoiceRef": invoice.ref,
    }
    if metadata:
        merged.update(metadata)

    clean: dict[str, str] = {}
    for index, (key, value) in enumerate(merged.items()):
        if index == METADATA_MAX_ENTRIES:
            break
        clean[str(key)[:METADATA_MAX_KEY_LENGTH]] = _stringify(value)[:METADATA_MAX_VALUE_LENGTH]
    return clean


def _stringify(value: Any) -> str:
    return "" if value is None else str(value)
