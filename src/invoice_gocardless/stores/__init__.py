"""Collaborator stores the driver reads from and writes to."""

from invoice_gocardless.stores.session import (
    SESSION_TOKEN_KEY,
    InMemorySessionStore,
    SessionStore,
    SessionTokenHandshake,
)
from invoice_gocardless.stores.sources import InMemorySourceStore, SourceStore

__all__ = [
    "InMemorySessionStore",
    "InMemorySourceStore",
    "SESSION_TOKEN_KEY",
    "SessionStore",
    "SessionTokenHandshake",
    "SourceStore",
]
