"""Base interface for invoice payment drivers."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from invoice_gocardless.models import (
    ChargeResponse,
    CompleteResponse,
    Invoice,
    Payment,
    PaymentData,
    PaymentSource,
    RefundResponse,
)


class PaymentDriver(ABC):
    """
    Abstract base class for payment gateway drivers.

    The host invoicing system talks to every gateway through this
    interface. Gateway outcomes, including failures, are returned as
    response objects; only caller errors and configuration problems are
    raised.
    """

    #: Identifier stored on payment sources created by this driver
    slug: str = "base"

    def is_available(self, invoice: Invoice) -> bool:
        """Whether the driver can be offered for the given invoice."""
        return True

    def get_supported_currencies(self) -> list[str] | None:
        """Currency codes the driver accepts, or None for any currency."""
        return None

    def is_redirect(self) -> bool:
        """Whether paying with this driver sends the customer off-site."""
        return False

    def get_payment_fields(self) -> list[Any]:
        """Checkout fields the driver needs from the customer."""
        return []

    def get_checkout_assets(self) -> list[Any]:
        """Assets the checkout page must load for this driver."""
        return []

    @abstractmethod
    def charge(
        self,
        amount: int,
        currency: str,
        description: str,
        payment: Payment,
        invoice: Invoice,
        success_url: str,
        error_url: str,
        customer_present: bool,
        payment_data: PaymentData | None = None,
        source: PaymentSource | None = None,
    ) -> ChargeResponse:
        """
        Initiate a payment.

        Args:
            amount: Amount to charge in minor units
            currency: ISO 4217 currency code (e.g., "GBP")
            description: Description shown to the payer
            payment: Payment record being settled
            invoice: Invoice being paid
            success_url: Where the customer lands after a successful off-site step
            error_url: Where the customer lands after a failed off-site step
            customer_present: Whether the customer is present for the transaction
            payment_data: Per-charge data such as custom metadata
            source: Saved payment source to charge, if any

        Returns:
            ChargeResponse in REDIRECTING, PROCESSING or FAILED status
        """
        pass

    @abstractmethod
    def complete(
        self,
        payment: Payment,
        invoice: Invoice,
        get_vars: Mapping[str, Any],
        post_vars: Mapping[str, Any],
    ) -> CompleteResponse:
        """
        Complete a payment after the customer returns from the gateway.

        Args:
            payment: Payment being completed
            invoice: Invoice being paid
            get_vars: Query parameters of the callback request
            post_vars: Form parameters of the callback request

        Returns:
            CompleteResponse in PROCESSING or FAILED status
        """
        pass

    @abstractmethod
    def refund(
        self,
        transaction_id: str,
        amount: int,
        currency: str,
        payment_data: PaymentData,
        reason: str,
        payment: Payment,
        invoice: Invoice,
    ) -> RefundResponse:
        """Refund (part of) a completed payment."""
        pass

    @abstractmethod
    def sca(self, data: Mapping[str, Any], success_url: str) -> Any:
        """Handle a strong customer authentication step."""
        pass

    @abstractmethod
    def create_source(self, source: PaymentSource, data: Mapping[str, Any]) -> None:
        """Populate a new payment source from driver-specific data."""
        pass

    @abstractmethod
    def update_source(self, source: PaymentSource) -> None:
        pass

    @abstractmethod
    def delete_source(self, source: PaymentSource) -> None:
        pass
