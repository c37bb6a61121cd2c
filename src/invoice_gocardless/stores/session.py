"""Session storage and the single-use redirect-flow token handshake."""

import secrets
import string
from typing import Protocol

from invoice_gocardless.logging_config import get_logger

logger = get_logger(__name__)

SESSION_TOKEN_KEY = "gocardless_session_token"
SESSION_TOKEN_LENGTH = 32

_TOKEN_ALPHABET = string.ascii_letters + string.digits


class SessionStore(Protocol):
    """Key/value storage scoped to the active user session."""

    def set(self, key: str, value: str) -> None: ...

    def get(self, key: str) -> str | None: ...

    def unset(self, key: str) -> None: ...


class InMemorySessionStore:
    """Dict-backed session store for tests and single-process hosts."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def unset(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class SessionTokenHandshake:
    """
    Owns the lifecycle of the token GoCardless uses to check that the person
    completing a redirect flow is the one who started it.

    issue() creates and stores a fresh token, overwriting any earlier one.
    consume() reads it once and removes it, so a callback can never be
    replayed against the same token.
    """

    def __init__(self, store: SessionStore, key: str = SESSION_TOKEN_KEY) -> None:
        self.store = store
        self.key = key

    def issue(self) -> str:
        token = "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(SESSION_TOKEN_LENGTH))
        self.store.set(self.key, token)
        logger.debug("gocardless_session_token_issued", key=self.key)
        return token

    def consume(self) -> str | None:
        token = self.store.get(self.key)
        self.store.unset(self.key)
        logger.debug("gocardless_session_token_consumed", key=self.key, present=bool(token))
        return token or None
