"""Clients for remote services used by the driver."""

from invoice_gocardless.clients.gocardless_client import (
    LIVE_BASE_URL,
    SANDBOX_BASE_URL,
    GoCardlessClient,
)

__all__ = [
    "GoCardlessClient",
    "LIVE_BASE_URL",
    "SANDBOX_BASE_URL",
]
