"""
Callback token registry.

Inline buttons can only carry a short opaque string, so every button of a
choice directive gets a random token that maps back to the full dialogue
request. Tokens live in process memory only; a token is consumed by the first
press and any later press of the same button is an invalid selection.
"""

from __future__ import annotations

import logging
import secrets
import threading
from typing import Callable, Dict

from flowrelay.core.errors import InvalidSelection
from flowrelay.schemas.relay import DialogueRequest

logger = logging.getLogger(__name__)

TOKEN_BYTES = 8


def _generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


class CallbackTokenRegistry:
    """Thread- and task-safe token → request map with consume-once semantics."""

    def __init__(self, token_factory: Callable[[], str] = _generate_token) -> None:
        self._token_factory = token_factory
        self._requests: Dict[str, DialogueRequest] = {}
        self._lock = threading.Lock()

    def register(self, request: DialogueRequest) -> str:
        """Store the request under a fresh token and return the token."""
        with self._lock:
            token = self._token_factory()
            while token in self._requests:
                logger.warning("Callback token collision, regenerating")
                token = self._token_factory()
            self._requests[token] = request
        return token

    def consume(self, token: str) -> DialogueRequest:
        """
        Return the request bound to ``token`` and forget the token.

        Raises InvalidSelection when the token is unknown or already consumed.
        """
        with self._lock:
            request = self._requests.pop(token, None)
        if request is None:
            raise InvalidSelection(token)
        return request

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._requests

    def __len__(self) -> int:
        with self._lock:
            return len(self._requests)
