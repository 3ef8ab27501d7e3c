"""
Credential types accepted by the client.

Acquiring and refreshing tokens is the credential's own business; the
client only asks for a token on every attempt and attaches it.

Date: 2026-10-18
"""

import threading
from typing import NamedTuple, Protocol, runtime_checkable

TOKEN_SCOPE = "https://cognitiveservices.azure.com/.default"


class AccessToken(NamedTuple):
    """A bearer token and its expiry as a POSIX timestamp."""

    token: str
    expires_on: int


@runtime_checkable
class TokenCredential(Protocol):
    """Protocol for credentials that issue bearer tokens."""

    async def get_token(self, *scopes: str) -> AccessToken:
        """
        Get a token valid for the given scopes.

        Implementations must be safe for concurrent use; the client calls
        this once per dispatch attempt.
        """
        ...


class KeyCredential:
    """
    Static API key.

    The key can be rotated in place with ``update``; requests dispatched
    after the update carry the new key.
    """

    def __init__(self, key: str):
        if not key:
            raise ValueError("key must be a non-empty string")
        self._key = key
        self._lock = threading.Lock()

    @property
    def key(self) -> str:
        with self._lock:
            return self._key

    def update(self, key: str) -> None:
        """Replace the key."""
        if not key:
            raise ValueError("key must be a non-empty string")
        with self._lock:
            self._key = key

    def __repr__(self) -> str:
        return "KeyCredential(key=***)"
