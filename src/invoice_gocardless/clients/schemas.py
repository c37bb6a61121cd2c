"""Pydantic models for the GoCardless API requests/responses the driver uses.

Only the fields the driver reads are declared; everything else in a
GoCardless response is ignored.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiResource(BaseModel):
    """Base for resources returned by the API.

    ``status_code`` is the HTTP status of the response the resource was read
    from; it is filled in by the client, not by GoCardless.
    """

    model_config = ConfigDict(extra="ignore")

    status_code: int = Field(default=0, exclude=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class PrefilledCustomer(BaseModel):
    """Customer details shown pre-filled on the hosted payment pages."""

    given_name: str = ""
    family_name: str = ""
    company_name: str = ""
    email: str = ""
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    postal_code: str = ""


class RedirectFlowCreateRequest(BaseModel):
    """Body of ``POST /redirect_flows``."""

    session_token: str = Field(..., min_length=1)
    success_redirect_url: str = Field(..., min_length=1)
    description: Optional[str] = None
    prefilled_customer: Optional[PrefilledCustomer] = None


class PaymentLinks(BaseModel):
    mandate: str = Field(..., min_length=1)


class PaymentCreateRequest(BaseModel):
    """Body of ``POST /payments``."""

    amount: int = Field(..., ge=0, description="Amount in minor units")
    currency: str = Field(..., min_length=3, max_length=3)
    description: str = ""
    metadata: Dict[str, str] = Field(default_factory=dict)
    links: PaymentLinks


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class RedirectFlowLinks(BaseModel):
    model_config = ConfigDict(extra="ignore")

    mandate: Optional[str] = None
    customer: Optional[str] = None
    customer_bank_account: Optional[str] = None


class RedirectFlow(ApiResource):
    id: str
    redirect_url: Optional[str] = None
    session_token: Optional[str] = None
    links: RedirectFlowLinks = Field(default_factory=RedirectFlowLinks)


class Payment(ApiResource):
    id: str
    status: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None


class MandateLinks(BaseModel):
    model_config = ConfigDict(extra="ignore")

    customer_bank_account: Optional[str] = None
    customer: Optional[str] = None


class Mandate(ApiResource):
    id: str
    status: Optional[str] = None
    links: MandateLinks = Field(default_factory=MandateLinks)


class CustomerBankAccount(ApiResource):
    id: str
    bank_name: Optional[str] = None
    account_number_ending: Optional[str] = None
    account_holder_name: Optional[str] = None


class ApiErrorDetail(BaseModel):
    """Body of ``{"error": {...}}`` returned on failed requests."""

    model_config = ConfigDict(extra="ignore")

    message: str = ""
    type: Optional[str] = None
    code: Optional[int] = None
    request_id: Optional[str] = None
    errors: list[dict] = Field(default_factory=list)

    def reason(self) -> Optional[str]:
        """First machine-readable reason GoCardless gave, if any."""
        for error in self.errors:
            if reason := error.get("reason"):
                return str(reason)
        return self.type
