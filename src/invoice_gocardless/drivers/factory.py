"""
Driver factory for creating payment driver instances.

The host invoicing system looks drivers up by the slug stored on invoices
and payment sources, so every driver is registered under its slug.
"""

from typing import Any

from invoice_gocardless.clients.gocardless_client import GoCardlessClient
from invoice_gocardless.config import settings
from invoice_gocardless.drivers.base import PaymentDriver
from invoice_gocardless.drivers.gocardless import GoCardlessDriver
from invoice_gocardless.logging_config import get_logger
from invoice_gocardless.stores.session import SessionStore
from invoice_gocardless.stores.sources import SourceStore

logger = get_logger(__name__)


class DriverFactory:
    """Factory for creating payment driver instances by slug."""

    # Registry of available drivers
    _DRIVERS: dict[str, type[PaymentDriver]] = {
        GoCardlessDriver.slug: GoCardlessDriver,
    }

    @classmethod
    def create_driver(
        cls,
        driver_name: str,
        session_store: SessionStore,
        source_store: SourceStore,
        driver_config: dict[str, Any] | None = None,
    ) -> PaymentDriver:
        """
        Create a payment driver instance by name.

        Args:
            driver_name: Slug of the driver (e.g., "gocardless")
            session_store: Session storage handed to the driver
            source_store: Payment source storage handed to the driver
            driver_config: Optional driver-specific configuration. For
                GoCardless: ``access_token``, ``base_url``, ``timeout_seconds``.
                If not provided, the client is built from global settings.

        Returns:
            PaymentDriver instance

        Raises:
            ValueError: If driver_name is not registered
            ConfigurationError: If the driver's credentials are missing

        Examples:
            driver = DriverFactory.create_driver("gocardless", session, sources)

            driver = DriverFactory.create_driver(
                "gocardless",
                session,
                sources,
                driver_config={"access_token": "sandbox_...", "timeout_seconds": 15},
            )
        """
        driver_name_lower = driver_name.lower()

        if driver_name_lower not in cls._DRIVERS:
            available = ", ".join(cls._DRIVERS.keys())
            raise ValueError(
                f"Unknown driver: {driver_name}. "
                f"Available drivers: {available}"
            )

        driver_class = cls._DRIVERS[driver_name_lower]

        logger.info(
            "driver_created",
            driver_name=driver_name_lower,
            driver_class=driver_class.__name__,
        )

        if driver_class is GoCardlessDriver:
            client = None
            if driver_config is not None:
                config = dict(driver_config)
                client = GoCardlessClient(access_token=config.pop("access_token", ""), **config)
            return GoCardlessDriver(
                session_store=session_store,
                source_store=source_store,
                client=client,
                settings=settings,
            )

        return driver_class(
            session_store=session_store,
            source_store=source_store,
            **(driver_config or {}),
        )

    @classmethod
    def register_driver(cls, name: str, driver_class: type[PaymentDriver]) -> None:
        """
        Register a new driver type.

        Example:
            DriverFactory.register_driver("stripe", StripeDriver)
        """
        if not issubclass(driver_class, PaymentDriver):
            raise TypeError(f"{driver_class.__name__} must inherit from PaymentDriver")

        cls._DRIVERS[name.lower()] = driver_class
        logger.info(
            "driver_registered",
            driver_name=name.lower(),
            driver_class=driver_class.__name__,
        )

    @classmethod
    def list_drivers(cls) -> list[str]:
        """Get list of available driver slugs."""
        return sorted(cls._DRIVERS.keys())


def get_driver(
    session_store: SessionStore,
    source_store: SourceStore,
    driver_name: str = GoCardlessDriver.slug,
    driver_config: dict[str, Any] | None = None,
) -> PaymentDriver:
    """Convenience function to create a payment driver."""
    return DriverFactory.create_driver(driver_name, session_store, source_store, driver_config)
