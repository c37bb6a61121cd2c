"""Payment source storage."""

import itertools
from typing import Any, Protocol

from invoice_gocardless.logging_config import get_logger
from invoice_gocardless.models import PaymentSource

logger = get_logger(__name__)


class SourceStore(Protocol):
    """Persists reusable payment sources for customers."""

    def create(
        self,
        customer_id: int | str | None,
        driver: str,
        data: dict[str, Any],
        label: str | None = None,
    ) -> PaymentSource: ...


class InMemorySourceStore:
    """
    Source store that keeps everything in a list.

    Every create() call adds a new source; nothing is merged or deduplicated.
    """

    def __init__(self) -> None:
        self.sources: list[PaymentSource] = []
        self._ids = itertools.count(1)

    def create(
        self,
        customer_id: int | str | None,
        driver: str,
        data: dict[str, Any],
        label: str | None = None,
    ) -> PaymentSource:
        source = PaymentSource(
            id=next(self._ids),
            customer_id=customer_id,
            driver=driver,
            data=dict(data),
            label=label,
        )
        self.sources.append(source)
        logger.info(
            "payment_source_created",
            source_id=source.id,
            customer_id=customer_id,
            driver=driver,
        )
        return source

    def for_customer(self, customer_id: int | str) -> list[PaymentSource]:
        return [s for s in self.sources if s.customer_id == customer_id]
