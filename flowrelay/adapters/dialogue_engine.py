"""Client for the dialogue engine's interact endpoint (Voiceflow general runtime)."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from flowrelay.config import Settings, get_settings
from flowrelay.core.errors import EngineError
from flowrelay.schemas.directives import Trace
from flowrelay.schemas.relay import DialogueRequest

logger = logging.getLogger(__name__)

INTERACT_PATH = "/state/user/{chat_id}/interact"

_TRACE_LIST = TypeAdapter(list[Trace])


class DialogueEngineClient:
    """
    Sends one request per call and returns the complete, ordered trace list.

    No retries: every failure (transport error, timeout, non-2xx, body that is
    not a list of trace objects) is raised as EngineError.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: str,
        version_id: str = "production",
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._version_id = version_id
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "DialogueEngineClient":
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        headers = {"versionID": self._version_id}
        if self._api_key:
            headers["Authorization"] = self._api_key
        return headers

    async def interact(self, chat_id: str, request: DialogueRequest) -> list[Trace]:
        path = INTERACT_PATH.format(chat_id=quote(str(chat_id), safe=""))
        try:
            response = await self._client.post(
                path, json={"request": request}, headers=self._headers()
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise EngineError(
                f"Dialogue engine returned HTTP {status}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            raise EngineError(f"Dialogue engine request failed: {e!r}") from e

        try:
            body: Any = response.json()
        except ValueError as e:
            raise EngineError(f"Dialogue engine returned invalid JSON: {e}") from e
        try:
            traces = _TRACE_LIST.validate_python(body)
        except ValidationError as e:
            raise EngineError(f"Dialogue engine returned malformed traces: {e}") from e

        logger.debug(
            "Dialogue engine returned %d traces for chat %s", len(traces), chat_id
        )
        return traces


def build_dialogue_engine_client(
    settings: Optional[Settings] = None,
) -> DialogueEngineClient:
    settings = settings or get_settings()
    if not settings.dialogue_api_key:
        logger.warning(
            "DIALOGUE_API_KEY is not set; the dialogue engine will reject requests."
        )
    return DialogueEngineClient(
        api_key=settings.dialogue_api_key,
        base_url=settings.dialogue_api_url,
        version_id=settings.dialogue_version_id,
        timeout_seconds=settings.dialogue_timeout_seconds,
    )
