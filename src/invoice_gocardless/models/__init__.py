"""Domain models for the GoCardless invoice driver."""

from invoice_gocardless.models.exceptions import (
    ConfigurationError,
    DriverError,
    GatewayConnectivityError,
    GatewayError,
    GatewayMalformedResponseError,
    GatewayRejectionError,
    UnimplementedError,
    ValidationError,
)
from invoice_gocardless.models.invoice import (
    Address,
    Customer,
    Invoice,
    Payment,
    PaymentData,
    PaymentSource,
)
from invoice_gocardless.models.responses import (
    ChargeResponse,
    CompleteResponse,
    DriverResponse,
    RefundResponse,
    ResponseStatus,
)

__all__ = [
    "Address",
    "ChargeResponse",
    "CompleteResponse",
    "ConfigurationError",
    "Customer",
    "DriverError",
    "DriverResponse",
    "GatewayConnectivityError",
    "GatewayError",
    "GatewayMalformedResponseError",
    "GatewayRejectionError",
    "Invoice",
    "Payment",
    "PaymentData",
    "PaymentSource",
    "RefundResponse",
    "ResponseStatus",
    "UnimplementedError",
    "ValidationError",
]
