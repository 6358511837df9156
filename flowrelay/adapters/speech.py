"""Speech-to-text clients."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from openai import AsyncOpenAI

from flowrelay.config import Settings, get_settings
from flowrelay.infra.logging_config import get_logger

logger = get_logger("speech")


class SpeechToTextClient(Protocol):
    async def transcribe_file(self, path: Path) -> Optional[str]:
        """Return the transcript, or None when the service produced no text."""
        ...


class OpenAIWhisperClient:
    """Transcribes audio files with OpenAI's transcription endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "whisper-1",
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self._api_key = api_key
        self._client = client
        self._model = model

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def transcribe_file(self, path: Path) -> Optional[str]:
        with path.open("rb") as audio:
            response = await self._get_client().audio.transcriptions.create(
                model=self._model,
                file=audio,
            )
        text = getattr(response, "text", None)
        if not text:
            logger.warning("Transcription response had no text: %r", response)
            return None
        return text


def build_speech_client(settings: Optional[Settings] = None) -> OpenAIWhisperClient:
    settings = settings or get_settings()
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; voice messages will fail.")
    return OpenAIWhisperClient(
        api_key=settings.openai_api_key, model=settings.transcription_model
    )
