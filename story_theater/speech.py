"""Speech client: fire-and-forget text-to-speech for the director.

The director injects a speech object matching the protocol:

    def speak(self, text: str, emotion: EmotionType, language: str) -> None: ...
    def stop(self) -> None: ...

`speak` must return immediately. The director never learns when (or whether)
audio finished; it waits an estimated duration instead. `stop` cancels any
utterance still in flight.

Two implementations are provided:

    HttpSpeech    posts to an ElevenLabs-style text-to-speech endpoint from
                  a background task. Audio bytes go to an optional sink.
    SilentSpeech  does nothing audible. Useful for dry runs and for the CLI
                  when no speech backend is configured.

Tests use a recording fake (see conftest.py) instead.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

import httpx

from story_theater.models import EmotionType

logger = logging.getLogger(__name__)

DEFAULT_VOICE_ID = "pNInz6obpgDQGcFmaJgB"
DEFAULT_MODEL = "eleven_monolingual_v1"


# ---------------------------------------------------------------------------
# Protocol: every speech implementation must match these signatures
# ---------------------------------------------------------------------------

class Speech(Protocol):
    def speak(self, text: str, emotion: EmotionType, language: str) -> None: ...

    def stop(self) -> None: ...


# ---------------------------------------------------------------------------
# Emotion → voice settings
# ---------------------------------------------------------------------------

EMOTION_VOICE_SETTINGS: dict[str, dict[str, float]] = {
    "happy":     {"stability": 0.3, "similarity_boost": 0.8, "style": 0.9, "speed": 1.1},
    "excited":   {"stability": 0.2, "similarity_boost": 0.9, "style": 1.0, "speed": 1.2},
    "calm":      {"stability": 0.8, "similarity_boost": 0.6, "style": 0.3, "speed": 0.9},
    "sad":       {"stability": 0.9, "similarity_boost": 0.7, "style": 0.2, "speed": 0.8},
    "angry":     {"stability": 0.4, "similarity_boost": 0.8, "style": 0.8, "speed": 1.0},
    "scared":    {"stability": 0.6, "similarity_boost": 0.7, "style": 0.5, "speed": 0.9},
    "surprised": {"stability": 0.3, "similarity_boost": 0.9, "style": 0.9, "speed": 1.15},
    "silly":     {"stability": 0.2, "similarity_boost": 0.8, "style": 1.0, "speed": 1.3},
    "neutral":   {"stability": 0.5, "similarity_boost": 0.7, "style": 0.5, "speed": 1.0},
}


def voice_settings_for(emotion: str) -> dict[str, float]:
    """Voice settings for an emotion; unknown emotions sound neutral."""
    return dict(EMOTION_VOICE_SETTINGS.get(emotion, EMOTION_VOICE_SETTINGS["neutral"]))


# ---------------------------------------------------------------------------
# HttpSpeech: connects to a real backend
# ---------------------------------------------------------------------------

class HttpSpeech:
    """Text-to-speech over HTTP, one background task per utterance.

    POST {provider_url}/v1/text-to-speech/{voice_id}
         {"text": ..., "model_id": ..., "voice_settings": {...}}
    Response body: raw audio bytes.

    Args:
        provider_url: Base URL of the backend, e.g. "https://api.elevenlabs.io".
        api_key:      Bearer token, or empty string if not required.
        voice_id:     Voice to synthesize with.
        model:        Model identifier sent as model_id.
        timeout:      HTTP timeout in seconds. Defaults to 30.
        on_audio:     Called with the audio bytes of each finished utterance.
    """

    def __init__(
        self,
        provider_url: str,
        api_key: str = "",
        voice_id: str = DEFAULT_VOICE_ID,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        on_audio: Callable[[bytes], None] | None = None,
    ) -> None:
        self._base_url = provider_url.rstrip("/")
        self._api_key = api_key
        self._voice_id = voice_id
        self._model = model
        self._timeout = timeout
        self._on_audio = on_audio
        self._tasks: set[asyncio.Task] = set()

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _build_request(self, text: str, emotion: str, language: str) -> tuple[str, dict]:
        """Return (url, body) for one utterance."""
        url = f"{self._base_url}/v1/text-to-speech/{self._voice_id}"
        body = {
            "text": text,
            "model_id": self._model,
            "language_code": language,
            "voice_settings": voice_settings_for(emotion),
        }
        return url, body

    async def synthesize(self, text: str, emotion: str = "neutral", language: str = "en") -> bytes:
        """Request audio for one utterance and return the raw bytes."""
        url, body = self._build_request(text, emotion, language)
        logger.debug("speech call emotion=%s lang=%s text_len=%d", emotion, language, len(text))

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, json=body, headers=self._headers())
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise SpeechError(f"Cannot connect to speech backend at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            raise SpeechError(
                f"Speech backend returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise SpeechError(f"Speech backend timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise SpeechError(f"Speech request failed: {e!r}") from e

        audio = resp.content
        logger.debug("speech response bytes=%d", len(audio))
        return audio

    async def _utter(self, text: str, emotion: str, language: str) -> None:
        try:
            audio = await self.synthesize(text, emotion, language)
        except SpeechError as e:
            logger.warning("Speech failed, continuing silently: %s", e)
            return
        if self._on_audio is None:
            return
        try:
            self._on_audio(audio)
        except Exception as e:
            # no caller awaits this task
            logger.warning("Audio sink failed: %s", e)

    def speak(self, text: str, emotion: EmotionType, language: str) -> None:
        """Schedule synthesis and return at once. Needs a running event loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise SpeechError("HttpSpeech.speak() needs a running event loop") from e
        task = loop.create_task(self._utter(text, emotion, language))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def stop(self) -> None:
        """Cancel every utterance still in flight."""
        for task in list(self._tasks):
            task.cancel()
        logger.debug("speech stopped, cancelled=%d", len(self._tasks))

    @property
    def in_flight(self) -> int:
        return sum(1 for t in self._tasks if not t.done())


# ---------------------------------------------------------------------------
# SilentSpeech: no audio; useful for dry runs
# ---------------------------------------------------------------------------

class SilentSpeech:
    """Accepts every utterance and plays nothing. No network calls."""

    def speak(self, text: str, emotion: EmotionType, language: str) -> None:
        logger.debug("SilentSpeech emotion=%s lang=%s text_len=%d", emotion, language, len(text))

    def stop(self) -> None:
        logger.debug("SilentSpeech stop")


# ---------------------------------------------------------------------------
# SpeechError: raised by HttpSpeech for all connection and protocol failures
# ---------------------------------------------------------------------------

class SpeechError(RuntimeError):
    """Raised when the speech backend cannot be reached or returns an error."""
