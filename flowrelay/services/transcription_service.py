"""Voice message transcription: download, transcribe, clean up."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from flowrelay.adapters.speech import SpeechToTextClient
from flowrelay.core.errors import TranscriptionError
from flowrelay.infra.logging_config import get_logger

logger = get_logger("transcription")

VOICE_FILE_NAME = "voice.oga"
DOWNLOAD_TIMEOUT_SECONDS = 60


@dataclass
class TranscriptionResult:
    """Result of a transcription attempt."""

    text: Optional[str] = None
    error: Optional[TranscriptionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.text)


class TranscriptionService:
    """
    Turns a voice note URL into text.

    Each call downloads into its own temporary directory, which is removed
    before the call returns, whatever the outcome.
    """

    def __init__(
        self,
        speech_client: SpeechToTextClient,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._speech_client = speech_client
        self._transport = transport

    async def transcribe(self, audio_url: str) -> TranscriptionResult:
        try:
            with tempfile.TemporaryDirectory(prefix="flowrelay-voice-") as tmp_dir:
                return await self._transcribe_in(
                    audio_url, Path(tmp_dir) / VOICE_FILE_NAME
                )
        except OSError as e:
            logger.error("Error preparing voice message workspace: %s", e)
            return TranscriptionResult(
                error=TranscriptionError(f"Temporary storage unavailable: {e}")
            )

    async def _transcribe_in(
        self, audio_url: str, audio_path: Path
    ) -> TranscriptionResult:
        try:
            await self._download(audio_url, audio_path)
        except (httpx.HTTPError, OSError) as e:
            logger.error("Error downloading voice message: %s", e)
            return TranscriptionResult(
                error=TranscriptionError(f"Download failed: {e}")
            )

        try:
            text = await self._speech_client.transcribe_file(audio_path)
        except Exception as e:
            logger.error("Error in speech-to-text call: %s", e)
            return TranscriptionResult(
                error=TranscriptionError(
                    f"Failed to transcribe the voice message: {e}"
                )
            )

        if not text or not text.strip():
            return TranscriptionResult(
                error=TranscriptionError(
                    "Transcription failed: no text found in response"
                )
            )
        return TranscriptionResult(text=text)

    async def _download(self, url: str, destination: Path) -> None:
        async with httpx.AsyncClient(
            timeout=DOWNLOAD_TIMEOUT_SECONDS, transport=self._transport
        ) as client:
            async with client.stream("GET", url) as response:
                response.raise_for_status()
                with destination.open("wb") as out:
                    async for chunk in response.aiter_bytes():
                        out.write(chunk)
