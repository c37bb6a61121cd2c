"""
Payment drivers.

- base.PaymentDriver: Abstract interface the host invoicing system calls
- gocardless.GoCardlessDriver: GoCardless direct-debit integration
- factory: Slug-based driver selection
"""

from invoice_gocardless.drivers.base import PaymentDriver
from invoice_gocardless.drivers.factory import DriverFactory, get_driver
from invoice_gocardless.drivers.gocardless import GoCardlessDriver
from invoice_gocardless.drivers.pricing import calculate_fee, extract_metadata

__all__ = [
    "DriverFactory",
    "GoCardlessDriver",
    "PaymentDriver",
    "calculate_fee",
    "extract_metadata",
    "get_driver",
]
