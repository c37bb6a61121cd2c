"""Custom exceptions for the GoCardless invoice driver."""


class DriverError(Exception):
    """Base exception for driver-related errors."""

    pass


class ConfigurationError(DriverError):
    """
    Raised when the driver cannot be set up, e.g. the access token for the
    selected environment is missing.

    This is a TERMINAL error. It is raised while the client is built, before
    any remote call is attempted.
    """

    pass


class ValidationError(DriverError):
    """
    Raised when the caller supplied unusable input.

    Examples:
    - A payment source without a "mandate_id"
    - Creating a source without a "mandate_id"

    Callers must fix the input; retrying the same call will fail again.
    """

    pass


class UnimplementedError(DriverError):
    """Raised for operations the GoCardless driver intentionally does not support."""

    pass


class GatewayError(DriverError):
    """
    Base exception for failures talking to the GoCardless API.

    Carries whatever diagnostics the gateway gave us so operators can trace
    the request; none of it is shown to customers.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.request_id = request_id


class GatewayConnectivityError(GatewayError):
    """
    Raised when the gateway could not be reached.

    Examples:
    - DNS / connection failures
    - Read or connect timeouts
    """

    pass


class GatewayRejectionError(GatewayError):
    """Raised when the gateway answered with an error response (HTTP >= 400)."""

    pass


class GatewayMalformedResponseError(GatewayError):
    """Raised when the gateway response is not JSON or lacks the expected envelope."""

    pass
