"""Unit tests for driver factory."""

import pytest

from invoice_gocardless.clients.gocardless_client import LIVE_BASE_URL
from invoice_gocardless.drivers import (
    DriverFactory,
    GoCardlessDriver,
    PaymentDriver,
    get_driver,
)
from invoice_gocardless.models import ConfigurationError
from invoice_gocardless.stores import InMemorySessionStore, InMemorySourceStore


@pytest.fixture
def stores() -> tuple[InMemorySessionStore, InMemorySourceStore]:
    return InMemorySessionStore(), InMemorySourceStore()


class TestDriverFactoryCreation:
    def test_create_gocardless_driver_with_config(self, stores) -> None:
        session_store, source_store = stores

        driver = DriverFactory.create_driver(
            "gocardless",
            session_store,
            source_store,
            driver_config={
                "access_token": "live_token",
                "base_url": LIVE_BASE_URL,
                "timeout_seconds": 15,
            },
        )

        assert isinstance(driver, GoCardlessDriver)
        assert driver.client.base_url == LIVE_BASE_URL
        assert driver.client.timeout_seconds == 15
        assert driver.sources is source_store

    def test_create_driver_case_insensitive(self, stores) -> None:
        config = {"access_token": "sandbox_token"}

        for name in ("gocardless", "GOCARDLESS", "GoCardless"):
            assert isinstance(DriverFactory.create_driver(name, *stores, driver_config=config), GoCardlessDriver)

    def test_config_without_access_token_raises_configuration_error(self, stores) -> None:
        with pytest.raises(ConfigurationError, match="Missing GoCardless Access Token"):
            DriverFactory.create_driver("gocardless", *stores, driver_config={"timeout_seconds": 15})

    def test_create_unknown_driver_raises_error(self, stores) -> None:
        with pytest.raises(ValueError) as exc_info:
            DriverFactory.create_driver("unknown_driver", *stores)

        assert "Unknown driver: unknown_driver" in str(exc_info.value)
        assert "Available drivers:" in str(exc_info.value)

    def test_get_driver_defaults_to_gocardless(self, stores) -> None:
        driver = get_driver(*stores, driver_config={"access_token": "sandbox_token"})

        assert isinstance(driver, GoCardlessDriver)


class TestDriverRegistration:
    def test_list_drivers(self) -> None:
        assert "gocardless" in DriverFactory.list_drivers()

    def test_register_non_driver_raises(self) -> None:
        class NotADriver:
            pass

        with pytest.raises(TypeError, match="must inherit from PaymentDriver"):
            DriverFactory.register_driver("broken", NotADriver)

    def test_register_custom_driver(self, stores, monkeypatch) -> None:
        class OfflineDriver(GoCardlessDriver):
            slug = "offline"

        monkeypatch.setattr(DriverFactory, "_DRIVERS", dict(DriverFactory._DRIVERS))
        DriverFactory.register_driver("Offline", OfflineDriver)

        assert "offline" in DriverFactory.list_drivers()
        assert issubclass(DriverFactory._DRIVERS["offline"], PaymentDriver)
