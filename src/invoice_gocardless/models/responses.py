"""Driver response models returned to the host invoicing system."""

from dataclasses import dataclass
from enum import Enum


class ResponseStatus(str, Enum):
    """Terminal state of a driver call."""

    REDIRECTING = "REDIRECTING"
    PROCESSING = "PROCESSING"
    FAILED = "FAILED"


@dataclass(frozen=True)
class DriverResponse:
    """
    Result of a charge, complete or refund call.

    Exactly one status is set per call. Failures are reported here rather
    than raised: ``error_message`` and ``error_code`` are for operators,
    ``error_user`` is the only text safe to show a customer.
    """

    status: ResponseStatus

    # Fields populated on REDIRECTING status
    redirect_url: str | None = None

    # Fields populated on PROCESSING status
    transaction_id: str | None = None
    fee: int | None = None

    # Fields populated on FAILED status
    error_message: str | None = None
    error_code: str | None = None
    error_user: str | None = None

    def __post_init__(self) -> None:
        """Validate that required fields are present based on status."""
        if self.status == ResponseStatus.REDIRECTING:
            if not self.redirect_url:
                raise ValueError("redirect_url required for REDIRECTING status")
        elif self.status == ResponseStatus.PROCESSING:
            if not self.transaction_id:
                raise ValueError("transaction_id required for PROCESSING status")
        elif self.status == ResponseStatus.FAILED:
            if not self.error_user:
                raise ValueError("error_user required for FAILED status")

    @classmethod
    def redirecting(cls, redirect_url: str):
        return cls(status=ResponseStatus.REDIRECTING, redirect_url=redirect_url)

    @classmethod
    def processing(cls, transaction_id: str, fee: int | None = None):
        return cls(status=ResponseStatus.PROCESSING, transaction_id=transaction_id, fee=fee)

    @classmethod
    def failed(cls, error_message: str | None, error_code: str | None, error_user: str):
        return cls(
            status=ResponseStatus.FAILED,
            error_message=error_message,
            error_code=error_code,
            error_user=error_user,
        )

    @property
    def is_redirect(self) -> bool:
        return self.status == ResponseStatus.REDIRECTING

    @property
    def is_processing(self) -> bool:
        return self.status == ResponseStatus.PROCESSING

    @property
    def is_failed(self) -> bool:
        return self.status == ResponseStatus.FAILED


class ChargeResponse(DriverResponse):
    """Response to ``charge``."""


class CompleteResponse(DriverResponse):
    """Response to ``complete``."""


class RefundResponse(DriverResponse):
    """Response to ``refund``."""
