"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Sample invoice, customer and payment data
- In-memory session and source stores
- A GoCardless driver wired to a mocked API client
"""

from unittest.mock import MagicMock

import pytest

from invoice_gocardless.clients.gocardless_client import GoCardlessClient
from invoice_gocardless.config import GoCardlessSettings, Settings
from invoice_gocardless.drivers.gocardless import GoCardlessDriver
from invoice_gocardless.models import (
    Address,
    Customer,
    Invoice,
    Payment,
    PaymentData,
    PaymentSource,
)
from invoice_gocardless.stores import InMemorySessionStore, InMemorySourceStore


@pytest.fixture
def test_settings() -> Settings:
    """Sandbox settings with a dummy access token."""
    return Settings(
        environment="development",
        gocardless=GoCardlessSettings(
            access_token_sandbox="sandbox_test_token",
            access_token_live="",
        ),
    )


@pytest.fixture
def customer() -> Customer:
    return Customer(
        id=42,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        billing_email="accounts@example.com",
        organisation="Analytical Engines Ltd",
        addresses=(
            Address(line_1="1 Byron Street", line_2="Flat 2", town="London", postcode="N1 1AA"),
            Address(line_1="99 Elsewhere Road", town="Leeds", postcode="LS1 1AA"),
        ),
    )


@pytest.fixture
def invoice(customer: Customer) -> Invoice:
    return Invoice(id=7, ref="INV-7", customer=customer)


@pytest.fixture
def payment() -> Payment:
    return Payment(
        id=1001,
        amount=1500,
        currency="GBP",
        description="Invoice INV-7",
        custom_data=PaymentData(metadata={"orderId": "ORD-9"}),
        invoice_id=7,
    )


@pytest.fixture
def mandate_source() -> PaymentSource:
    return PaymentSource(
        id=5,
        customer_id=42,
        driver="gocardless",
        data={"mandate_id": "MD123"},
        label="Direct Debit (Barclays account ending 11)",
    )


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def source_store() -> InMemorySourceStore:
    return InMemorySourceStore()


@pytest.fixture
def mock_client() -> MagicMock:
    """GoCardless client with every API call mocked out."""
    return MagicMock(spec=GoCardlessClient)


@pytest.fixture
def driver(
    session_store: InMemorySessionStore,
    source_store: InMemorySourceStore,
    mock_client: MagicMock,
    test_settings: Settings,
) -> GoCardlessDriver:
    return GoCardlessDriver(
        session_store=session_store,
        source_store=source_store,
        client=mock_client,
        settings=test_settings,
    )
