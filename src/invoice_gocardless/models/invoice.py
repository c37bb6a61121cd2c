"""Invoice domain models consumed by the driver.

These mirror the parts of the host invoicing system the driver reads. The
driver never mutates an invoice or a payment; only payment sources are
written, and only through the source store.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Address:
    """Postal address attached to a customer."""

    line_1: str | None = None
    line_2: str | None = None
    town: str | None = None
    postcode: str | None = None


@dataclass(frozen=True)
class Customer:
    """Customer who owns an invoice."""

    id: int | str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    billing_email: str = ""
    organisation: str = ""
    addresses: tuple[Address, ...] = ()


@dataclass(frozen=True)
class Invoice:
    """Invoice being paid."""

    id: int | str
    ref: str
    customer: Customer | None = None


@dataclass(frozen=True)
class PaymentData:
    """Caller-supplied data attached to a single charge."""

    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Payment:
    """
    Payment record created by the host before the driver is invoked.

    Amounts are in minor units (e.g. 1000 = £10.00).
    """

    id: int | str
    amount: int
    currency: str
    description: str = ""
    custom_data: PaymentData = field(default_factory=PaymentData)
    invoice_id: int | str | None = None


@dataclass
class PaymentSource:
    """
    Reusable payment method saved against a customer.

    For GoCardless sources ``data`` holds the mandate ID under
    ``"mandate_id"``.
    """

    customer_id: int | str | None
    driver: str
    data: dict[str, Any] = field(default_factory=dict)
    label: str | None = None
    id: int | str | None = None
