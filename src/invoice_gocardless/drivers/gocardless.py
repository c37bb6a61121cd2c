"""
GoCardless direct-debit driver.

Customers without a saved mandate are sent through a GoCardless redirect
flow. When they come back, the flow is completed, the resulting mandate is
saved as a payment source and the payment is taken against it. Customers
with a saved source are charged against its mandate straight away.

Reference:
- https://developer.gocardless.com/api-reference/#core-endpoints-redirect-flows
- https://developer.gocardless.com/api-reference/#core-endpoints-payments
"""

from collections.abc import Mapping
from typing import Any

import structlog

from invoice_gocardless.clients.gocardless_client import GoCardlessClient
from invoice_gocardless.clients.schemas import (
    PaymentCreateRequest,
    PaymentLinks,
    PrefilledCustomer,
    RedirectFlowCreateRequest,
)
from invoice_gocardless.config import Settings
from invoice_gocardless.config import settings as default_settings
from invoice_gocardless.drivers.base import PaymentDriver
from invoice_gocardless.drivers.pricing import calculate_fee, extract_metadata
from invoice_gocardless.logging_config import get_logger
from invoice_gocardless.models import (
    ChargeResponse,
    CompleteResponse,
    DriverError,
    DriverResponse,
    GatewayConnectivityError,
    GatewayMalformedResponseError,
    GatewayRejectionError,
    Invoice,
    Payment,
    PaymentData,
    PaymentSource,
    RefundResponse,
    UnimplementedError,
    ValidationError,
)
from invoice_gocardless.stores.session import SessionStore, SessionTokenHandshake
from invoice_gocardless.stores.sources import SourceStore

logger = get_logger(__name__)

HTTP_OK = 200
HTTP_CREATED = 201

# Correct as of 2020-08-11
SUPPORTED_CURRENCIES = ["AUD", "CAD", "DKK", "EUR", "GBP", "NZD", "SEK", "USD"]

MSG_REJECTED = "The gateway rejected the request, you may wish to try again."
MSG_CONNECTION = "There was a problem connecting to the gateway, you may wish to try again."
MSG_MALFORMED = "The gateway returned a malformed response, you may wish to try again."
MSG_COMMUNICATION = "An error occurred whilst communicating with the gateway, you may wish to try again."
MSG_UNEXPECTED = "An error occurred while executing the request."
MSG_MISSING_DATA = "The request failed to complete, data was missing."
MSG_REFUNDS_UNAVAILABLE = "GoCardless refunds are not available right now."


class GoCardlessDriver(PaymentDriver):
    """
    Payment driver taking direct-debit payments through GoCardless.

    The driver keeps no state between calls. The only thing that survives a
    redirect round trip is the session token, held in the injected session
    store.

    Completing the same redirect flow twice creates two payment sources and
    two payments; callers that need idempotency must serialize calls.
    """

    slug = "gocardless"

    def __init__(
        self,
        session_store: SessionStore,
        source_store: SourceStore,
        client: GoCardlessClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize the GoCardless driver.

        Args:
            session_store: Session storage for the redirect-flow token
            source_store: Storage for payment sources created on completion
            client: Pre-built API client; built from settings when omitted
            settings: Application settings (defaults to the global settings)

        Raises:
            ConfigurationError: If no client is given and the access token for
                the current environment is missing
        """
        self.settings = settings or default_settings
        self.session = SessionTokenHandshake(session_store)
        self.sources = source_store
        self.client = client or GoCardlessClient.from_settings(self.settings)

    def get_setting(self, name: str) -> Any:
        """Read a GoCardless setting, e.g. ``access_token_live``."""
        return getattr(self.settings.gocardless, name)

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def get_supported_currencies(self) -> list[str]:
        return list(SUPPORTED_CURRENCIES)

    def is_redirect(self) -> bool:
        return True

    # ------------------------------------------------------------------
    # Charge
    # ------------------------------------------------------------------

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
        Charge an invoice.

        Without a source the customer is sent to GoCardless to set up a
        mandate (REDIRECTING). With a source, a payment is created against
        its mandate (PROCESSING); GoCardless confirms it later.

        Raises:
            ValidationError: If the source carries no mandate ID. No remote
                call is made; the source must be fixed before retrying.
        """
        if source is None:
            return self._create_redirect_flow(invoice, description, success_url)

        mandate_id = self._mandate_id_from(source)
        log = logger.bind(invoice_id=invoice.id, payment_id=payment.id, mandate_id=mandate_id)
        log.info("gocardless_charge_starting", amount=amount, currency=currency)

        try:
            transaction_id = self._create_payment(
                mandate_id,
                description,
                amount,
                currency,
                invoice,
                payment_data.metadata if payment_data else None,
            )
        except Exception as e:
            return self._fold_exception(ChargeResponse, e, log)

        if not transaction_id:
            log.error("gocardless_charge_no_transaction_id")
            return ChargeResponse.failed("No transaction ID was returned.", None, MSG_REJECTED)

        log.info("gocardless_charge_processing", transaction_id=transaction_id)
        return ChargeResponse.processing(transaction_id, fee=calculate_fee(amount))

    def _create_redirect_flow(self, invoice: Invoice, description: str, success_url: str) -> ChargeResponse:
        log = logger.bind(invoice_id=invoice.id)
        try:
            request = RedirectFlowCreateRequest(
                session_token=self.session.issue(),
                success_redirect_url=success_url,
                description=description or None,
                prefilled_customer=self._prefilled_customer(invoice),
            )
            flow = self.client.create_redirect_flow(request)
        except Exception as e:
            log.warning(
                "gocardless_redirect_flow_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            return ChargeResponse.failed(str(e), _error_code(e), MSG_REJECTED)

        if flow.status_code != HTTP_CREATED or not flow.redirect_url:
            log.error("gocardless_redirect_flow_unexpected_status", status_code=flow.status_code)
            return ChargeResponse.failed(
                "Did not receive a 201 CREATED response when creating a redirect flow.",
                None,
                MSG_COMMUNICATION,
            )

        log.info("gocardless_redirect_flow_created", redirect_flow_id=flow.id)
        return ChargeResponse.redirecting(flow.redirect_url)

    @staticmethod
    def _prefilled_customer(invoice: Invoice) -> PrefilledCustomer | None:
        customer = invoice.customer
        if customer is None:
            return None

        address = customer.addresses[0] if customer.addresses else None
        return PrefilledCustomer(
            given_name=customer.first_name or "",
            family_name=customer.last_name or "",
            company_name=customer.organisation or "",
            email=customer.billing_email or customer.email or "",
            address_line1=(address.line_1 if address else None) or "",
            address_line2=(address.line_2 if address else None) or "",
            city=(address.town if address else None) or "",
            postal_code=(address.postcode if address else None) or "",
        )

    @staticmethod
    def _mandate_id_from(source: PaymentSource) -> str:
        mandate_id = (source.data or {}).get("mandate_id")
        if not mandate_id:
            raise ValidationError('Could not ascertain the "mandate_id" from the Source object.')
        return str(mandate_id)

    # ------------------------------------------------------------------
    # Complete
    # ------------------------------------------------------------------

    def complete(
        self,
        payment: Payment,
        invoice: Invoice,
        get_vars: Mapping[str, Any],
        post_vars: Mapping[str, Any],
    ) -> CompleteResponse:
        """
        Finish a redirect flow and take the payment.

        A missing ``redirect_flow_id`` fails without touching the session.
        Otherwise the session token is consumed first, whatever happens next.
        """
        log = logger.bind(invoice_id=invoice.id, payment_id=payment.id)

        redirect_flow_id = (get_vars or {}).get("redirect_flow_id")
        if not redirect_flow_id:
            log.warning("gocardless_complete_missing_redirect_flow_id")
            return CompleteResponse.failed(
                "The complete request was missing the redirect_flow_id query parameter",
                "missing_redirect_flow_id",
                MSG_MISSING_DATA,
            )

        session_token = self.session.consume()
        if not session_token:
            log.warning("gocardless_complete_missing_session_token", redirect_flow_id=redirect_flow_id)
            return CompleteResponse.failed(
                "The complete request was missing the session token",
                "missing_session_token",
                MSG_MISSING_DATA,
            )

        log = log.bind(redirect_flow_id=redirect_flow_id)
        try:
            flow = self.client.complete_redirect_flow(redirect_flow_id, session_token)
            if flow.status_code != HTTP_OK or not flow.links.mandate:
                log.error("gocardless_complete_unexpected_status", status_code=flow.status_code)
                return CompleteResponse.failed(
                    f"Unexpected response completing redirect flow (status: {flow.status_code})",
                    None,
                    MSG_REJECTED,
                )

            mandate_id = flow.links.mandate
            # A mandate is meant to be charged repeatedly, so always keep it as a source
            source = self.sources.create(
                invoice.customer.id if invoice.customer else None,
                self.slug,
                {"mandate_id": mandate_id},
            )
            log.info("gocardless_mandate_saved", mandate_id=mandate_id, source_id=source.id)

            transaction_id = self._create_payment(
                mandate_id,
                payment.description,
                payment.amount,
                payment.currency,
                invoice,
                payment.custom_data.metadata if payment.custom_data else None,
            )
        except Exception as e:
            return self._fold_exception(CompleteResponse, e, log)

        if not transaction_id:
            log.error("gocardless_complete_no_transaction_id")
            return CompleteResponse.failed("No transaction ID was returned.", None, MSG_REJECTED)

        log.info("gocardless_complete_processing", transaction_id=transaction_id)
        return CompleteResponse.processing(transaction_id, fee=calculate_fee(payment.amount))

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    def _create_payment(
        self,
        mandate_id: str,
        description: str,
        amount: int,
        currency: str,
        invoice: Invoice,
        metadata: Mapping[str, Any] | None,
    ) -> str | None:
        """Create a payment against a mandate; returns its ID only on 201 CREATED."""
        request = PaymentCreateRequest(
            description=description or "",
            amount=amount,
            currency=currency.upper(),
            metadata=extract_metadata(invoice, metadata),
            links=PaymentLinks(mandate=mandate_id),
        )
        created = self.client.create_payment(request)
        if created.status_code != HTTP_CREATED:
            return None
        return created.id

    @staticmethod
    def _fold_exception(
        response_cls: type[DriverResponse],
        e: Exception,
        log: structlog.stdlib.BoundLogger,
    ) -> DriverResponse:
        """Turn an exception raised mid-flow into a FAILED response."""
        if isinstance(e, GatewayConnectivityError):
            log.warning("gocardless_connection_error", error=str(e))
            return response_cls.failed(str(e), "connection_error", MSG_CONNECTION)

        if isinstance(e, GatewayRejectionError):
            log.warning(
                "gocardless_rejected",
                error=str(e),
                status_code=e.status_code,
                code=e.code,
                request_id=e.request_id,
            )
            return response_cls.failed(str(e), e.code or "gateway_rejected", MSG_REJECTED)

        if isinstance(e, GatewayMalformedResponseError):
            log.warning("gocardless_malformed_response", error=str(e), status_code=e.status_code)
            return response_cls.failed(str(e), "malformed_response", MSG_MALFORMED)

        log.error(
            "gocardless_unexpected_error",
            error_type=type(e).__name__,
            error=str(e),
            exc_info=True,
        )
        return response_cls.failed(str(e), "unexpected_error", MSG_UNEXPECTED)

    # ------------------------------------------------------------------
    # Refunds & SCA
    # ------------------------------------------------------------------

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
        # Not offered until there is a need for it and a way to test it properly
        logger.info("gocardless_refund_unavailable", transaction_id=transaction_id)
        return RefundResponse.failed(
            MSG_REFUNDS_UNAVAILABLE,
            "refunds_unavailable",
            MSG_REFUNDS_UNAVAILABLE,
        )

    def sca(self, data: Mapping[str, Any], success_url: str) -> Any:
        raise UnimplementedError("GoCardless does not support SCA requests.")

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def create_source(self, source: PaymentSource, data: Mapping[str, Any]) -> None:
        """
        Populate a new source from a mandate ID.

        When the source has no label, one is built from the bank account
        behind the mandate, e.g. "Direct Debit (Barclays account ending 11)".

        Raises:
            ValidationError: If ``data`` has no "mandate_id"
            DriverError: If the mandate (or its bank account) cannot be fetched
        """
        mandate_id = (data or {}).get("mandate_id")
        if not mandate_id:
            raise ValidationError(
                '"mandate_id" must be supplied when creating a GoCardless payment source.'
            )

        try:
            mandate = self.client.get_mandate(mandate_id)
            if not source.label:
                bank_account_id = mandate.links.customer_bank_account
                if not bank_account_id:
                    raise GatewayMalformedResponseError("Mandate has no linked customer bank account")
                bank_account = self.client.get_customer_bank_account(bank_account_id)
                source.label = "Direct Debit ({} account ending {})".format(
                    bank_account.bank_name,
                    bank_account.account_number_ending,
                )
        except Exception as e:
            logger.warning("gocardless_invalid_mandate", mandate_id=mandate_id, error=str(e))
            raise DriverError(f'"{mandate_id}" is not a valid mandate ID.') from e

        source.data = {"mandate_id": mandate_id}

    def update_source(self, source: PaymentSource) -> None:
        raise UnimplementedError("Updating GoCardless payment sources is not supported.")

    def delete_source(self, source: PaymentSource) -> None:
        raise UnimplementedError("Deleting GoCardless payment sources is not supported.")


def _error_code(e: Exception) -> str | None:
    if isinstance(e, GatewayRejectionError):
        return e.code or "gateway_rejected"
    if isinstance(e, GatewayConnectivityError):
        return "connection_error"
    if isinstance(e, GatewayMalformedResponseError):
        return "malformed_response"
    return None
