"""Playback and speech settings.

Defaults match the classic performance timing (80 ms per spoken character,
3 s pause for every interactive prompt). Any field can be overridden from the
environment, or from a .env file loaded by load_settings():

  THEATER_MS_PER_CHARACTER     estimated speech time per character of text
  THEATER_INTERACTION_WAIT_MS  fixed wait after each interactive prompt
  THEATER_LANGUAGE             language passed to the speech backend
  SPEECH_PROVIDER_URL          text-to-speech backend; empty → silent playback
  SPEECH_API_KEY               bearer token for the backend
  SPEECH_VOICE_ID              backend voice id
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from story_theater.speech import DEFAULT_VOICE_ID

SupportedLanguage = Literal["en", "fr", "es", "de"]

_ENV_FIELDS = {
    "ms_per_character": "THEATER_MS_PER_CHARACTER",
    "interaction_wait_ms": "THEATER_INTERACTION_WAIT_MS",
    "language": "THEATER_LANGUAGE",
    "speech_provider_url": "SPEECH_PROVIDER_URL",
    "speech_api_key": "SPEECH_API_KEY",
    "speech_voice_id": "SPEECH_VOICE_ID",
}


class Settings(BaseModel):
    ms_per_character: int = Field(default=80, ge=0)
    interaction_wait_ms: int = Field(default=3000, ge=0)
    language: SupportedLanguage = "en"
    speech_provider_url: str = ""
    speech_api_key: str = ""
    speech_voice_id: str = DEFAULT_VOICE_ID

    def speech_seconds(self, text: str, pause_after_ms: int) -> float:
        """Estimated time to speak `text` and hold the pause after it."""
        return (len(text) * self.ms_per_character + pause_after_ms) / 1000

    @property
    def interaction_seconds(self) -> float:
        return self.interaction_wait_ms / 1000


def load_settings(env_file: Path | None = None, **overrides) -> Settings:
    """Read settings from the environment (after loading .env), then overrides."""
    load_dotenv(env_file or Path.cwd() / ".env")
    values: dict = {}
    for field, var in _ENV_FIELDS.items():
        raw = os.getenv(var)
        if raw is not None and raw != "":
            values[field] = raw
    values.update(overrides)
    return Settings.model_validate(values)
