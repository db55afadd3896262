from typing import Any, Dict, Optional

import httpx
from loguru import logger

from audioscribe.core.config import Settings
from audioscribe.core.exceptions import TranscriptionError

NO_TRANSCRIPT = "No transcript available"


def extract_transcript(payload: Dict[str, Any]) -> str:
    """
    Pick the first alternative of the first channel from a Deepgram response

    Args:
        payload: Decoded response body

    Returns:
        Transcript text, or ``NO_TRANSCRIPT`` when the response has none
    """
    try:
        transcript = payload["results"]["channels"][0]["alternatives"][0]["transcript"]
    except (KeyError, IndexError, TypeError):
        return NO_TRANSCRIPT
    return transcript or NO_TRANSCRIPT


def _provider_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("err_msg", "message", "error"):
            if body.get(key):
                return str(body[key])
    return response.text


class TranscriptionService:
    """Service for transcribing audio through the Deepgram pre-recorded API"""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.client = client
        self.api_key = settings.DEEPGRAM_API_KEY
        self.endpoint = f"{settings.DEEPGRAM_API_URL}/listen"
        self.model = settings.DEEPGRAM_MODEL
        logger.info(f"Transcription service initialized with model {self.model}")

    async def transcribe(self, audio: bytes, mimetype: Optional[str] = None) -> str:
        """
        Transcribe audio bytes

        Args:
            audio: Raw audio content
            mimetype: Content type of the audio

        Returns:
            Transcript text, or ``NO_TRANSCRIPT`` if the provider found none

        Raises:
            TranscriptionError: If the provider reports an error or the call fails
        """
        logger.info(f"Sending {len(audio)} bytes to Deepgram")
        try:
            response = await self.client.post(
                self.endpoint,
                params={"model": self.model, "smart_format": "true"},
                headers={
                    "Authorization": f"Token {self.api_key}",
                    "Content-Type": mimetype or "application/octet-stream",
                },
                content=audio,
            )
        except httpx.HTTPError as e:
            logger.error(f"Deepgram request failed: {e}")
            raise TranscriptionError(f"Failed to transcribe audio: {e}")

        if response.is_error:
            message = _provider_message(response)
            logger.error(f"Deepgram error {response.status_code}: {message}")
            raise TranscriptionError(message)

        try:
            payload = response.json()
        except ValueError:
            raise TranscriptionError("Deepgram returned an unreadable response")

        transcript = extract_transcript(payload)
        logger.info(f"Transcription successful ({len(transcript)} characters)")
        return transcript
