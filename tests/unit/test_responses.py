"""Unit tests for driver response models."""

import dataclasses

import pytest

from invoice_gocardless.models import (
    ChargeResponse,
    CompleteResponse,
    RefundResponse,
    ResponseStatus,
)


class TestResponseConstruction:
    def test_redirecting(self) -> None:
        response = ChargeResponse.redirecting("https://pay.gocardless.com/flow/RE1")

        assert isinstance(response, ChargeResponse)
        assert response.status == ResponseStatus.REDIRECTING
        assert response.is_redirect
        assert not response.is_failed

    def test_processing(self) -> None:
        response = CompleteResponse.processing("PM1", fee=10)

        assert isinstance(response, CompleteResponse)
        assert response.is_processing
        assert response.transaction_id == "PM1"
        assert response.fee == 10

    def test_failed(self) -> None:
        response = RefundResponse.failed("internal", "code", "Please try again.")

        assert isinstance(response, RefundResponse)
        assert response.is_failed
        assert response.error_message == "internal"
        assert response.error_code == "code"
        assert response.error_user == "Please try again."

    def test_responses_are_immutable(self) -> None:
        response = ChargeResponse.processing("PM1")

        with pytest.raises(dataclasses.FrozenInstanceError):
            response.status = ResponseStatus.FAILED


class TestResponseValidation:
    def test_redirecting_requires_url(self) -> None:
        with pytest.raises(ValueError, match="redirect_url required"):
            ChargeResponse(status=ResponseStatus.REDIRECTING)

    def test_processing_requires_transaction_id(self) -> None:
        with pytest.raises(ValueError, match="transaction_id required"):
            ChargeResponse.processing("")

    def test_failed_requires_user_message(self) -> None:
        with pytest.raises(ValueError, match="error_user required"):
            ChargeResponse.failed("internal", None, "")
