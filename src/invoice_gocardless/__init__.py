"""GoCardless direct-debit payment driver for invoicing systems."""

__version__ = "0.1.0"
