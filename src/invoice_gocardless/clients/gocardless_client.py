"""GoCardless API client for redirect flows, payments and mandates."""

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
import pydantic

from invoice_gocardless.clients.schemas import (
    ApiErrorDetail,
    ApiResource,
    CustomerBankAccount,
    Mandate,
    Payment,
    PaymentCreateRequest,
    RedirectFlow,
    RedirectFlowCreateRequest,
)
from invoice_gocardless.config import Settings
from invoice_gocardless.logging_config import get_logger
from invoice_gocardless.models.exceptions import (
    ConfigurationError,
    GatewayConnectivityError,
    GatewayMalformedResponseError,
    GatewayRejectionError,
)

logger = get_logger(__name__)

LIVE_BASE_URL = "https://api.gocardless.com"
SANDBOX_BASE_URL = "https://api-sandbox.gocardless.com"

ResourceT = TypeVar("ResourceT", bound=ApiResource)


def _path_segment(value: str) -> str:
    """Encode an id as a single path segment; dots too, so ``..`` cannot climb."""
    return quote(str(value), safe="").replace(".", "%2E")


class GoCardlessClient:
    """
    Blocking client for the subset of the GoCardless API the driver needs.

    Every call either returns a parsed resource (carrying the HTTP status it
    was read from) or raises one of:

    - GatewayConnectivityError: the API could not be reached or timed out
    - GatewayRejectionError: the API answered with HTTP >= 400
    - GatewayMalformedResponseError: the body was not the JSON we expected

    The client never retries; that decision belongs to whoever started the
    payment.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = SANDBOX_BASE_URL,
        timeout_seconds: float = 10.0,
        api_version: str = "2015-07-06",
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the GoCardless client.

        Args:
            access_token: GoCardless access token for the target environment
            base_url: API root (live or sandbox)
            timeout_seconds: Request timeout in seconds (default: 10.0)
            api_version: Value of the GoCardless-Version header
            transport: Optional httpx transport, used by tests to stub the API

        Raises:
            ConfigurationError: If no access token was given
        """
        if not access_token:
            raise ConfigurationError("Missing GoCardless Access Token.")

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.http_client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={
                "Authorization": f"Bearer {access_token}",
                "GoCardless-Version": api_version,
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )

        logger.info(
            "gocardless_client_initialized",
            base_url=self.base_url,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
    ) -> "GoCardlessClient":
        """
        Build a client for the environment the application runs in.

        Production uses the live token and API; every other environment uses
        the sandbox.

        Raises:
            ConfigurationError: If the token for that environment is empty
        """
        if settings.is_production:
            access_token = settings.gocardless.access_token_live
            base_url = LIVE_BASE_URL
        else:
            access_token = settings.gocardless.access_token_sandbox
            base_url = SANDBOX_BASE_URL

        if not access_token:
            raise ConfigurationError("Missing GoCardless Access Token.")

        return cls(
            access_token=access_token,
            base_url=base_url,
            timeout_seconds=settings.gocardless.timeout_seconds,
            api_version=settings.gocardless.api_version,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client connection pool."""
        self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ------------------------------------------------------------------
    # Redirect flows
    # ------------------------------------------------------------------

    def create_redirect_flow(self, request: RedirectFlowCreateRequest) -> RedirectFlow:
        """Start a hosted mandate set-up flow (``POST /redirect_flows``)."""
        return self._call(
            "POST",
            "/redirect_flows",
            envelope="redirect_flows",
            resource=RedirectFlow,
            json={"redirect_flows": request.model_dump(exclude_none=True)},
        )

    def complete_redirect_flow(self, redirect_flow_id: str, session_token: str) -> RedirectFlow:
        """Finish a redirect flow once the customer returns; the mandate is linked on success."""
        return self._call(
            "POST",
            f"/redirect_flows/{_path_segment(redirect_flow_id)}/actions/complete",
            envelope="redirect_flows",
            resource=RedirectFlow,
            json={"data": {"session_token": session_token}},
        )

    # ------------------------------------------------------------------
    # Payments, mandates, bank accounts
    # ------------------------------------------------------------------

    def create_payment(self, request: PaymentCreateRequest) -> Payment:
        return self._call(
            "POST",
            "/payments",
            envelope="payments",
            resource=Payment,
            json={"payments": request.model_dump()},
        )

    def get_mandate(self, mandate_id: str) -> Mandate:
        return self._call("GET", f"/mandates/{_path_segment(mandate_id)}", envelope="mandates", resource=Mandate)

    def get_customer_bank_account(self, bank_account_id: str) -> CustomerBankAccount:
        return self._call(
            "GET",
            f"/customer_bank_accounts/{_path_segment(bank_account_id)}",
            envelope="customer_bank_accounts",
            resource=CustomerBankAccount,
        )

    # ------------------------------------------------------------------

    def _call(
        self,
        method: str,
        path: str,
        envelope: str,
        resource: type[ResourceT],
        json: dict[str, Any] | None = None,
    ) -> ResourceT:
        logger.debug("gocardless_request", method=method, path=path)

        try:
            response = self.http_client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.error("gocardless_timeout", method=method, path=path, error=str(e))
            raise GatewayConnectivityError(f"GoCardless timeout: {e}") from e
        except httpx.RequestError as e:
            # Network errors, connection errors, etc.
            logger.error("gocardless_request_error", method=method, path=path, error=str(e))
            raise GatewayConnectivityError(f"GoCardless request error: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            logger.error(
                "gocardless_malformed_response",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise GatewayMalformedResponseError(
                "GoCardless returned a non-JSON response",
                status_code=response.status_code,
            ) from e

        if response.status_code >= 400:
            raise self._rejection(method, path, response.status_code, body)

        if not isinstance(body, dict) or not isinstance(body.get(envelope), dict):
            raise GatewayMalformedResponseError(
                f'GoCardless response is missing the "{envelope}" envelope',
                status_code=response.status_code,
            )

        try:
            parsed = resource.model_validate(body[envelope])
        except pydantic.ValidationError as e:
            raise GatewayMalformedResponseError(
                f"Unexpected {envelope} payload: {e}",
                status_code=response.status_code,
            ) from e

        parsed.status_code = response.status_code
        logger.debug(
            "gocardless_response",
            method=method,
            path=path,
            status_code=response.status_code,
            resource_id=parsed.id if hasattr(parsed, "id") else None,
        )
        return parsed

    @staticmethod
    def _rejection(method: str, path: str, status_code: int, body: Any) -> GatewayRejectionError:
        error_body = body.get("error") if isinstance(body, dict) else None
        try:
            detail = ApiErrorDetail.model_validate(error_body or {})
        except pydantic.ValidationError:
            detail = ApiErrorDetail()

        logger.warning(
            "gocardless_request_rejected",
            method=method,
            path=path,
            status_code=status_code,
            error_type=detail.type,
            reason=detail.reason(),
            request_id=detail.request_id,
        )
        return GatewayRejectionError(
            detail.message or f"GoCardless rejected the request (status: {status_code})",
            status_code=status_code,
            code=detail.reason(),
            request_id=detail.request_id,
        )
