"""Story text splitting into sentences and scene windows."""

import re

SENTENCE_BREAK = re.compile(r"[.!?]+")

SCENE_SIZE = 3

SETTINGS = ("forest", "castle", "home", "school", "beach", "mountain", "space", "garden")

DEFAULT_SETTING = "magical place"


def split_sentences(text: str) -> list[str]:
    """Split on sentence terminators, dropping empty fragments.

    Terminators are consumed; "Wow!! A cat." → ["Wow", "A cat"].
    """
    if not text or not text.strip():
        return []
    return [s.strip() for s in SENTENCE_BREAK.split(text) if s.strip()]


def group_sentences(sentences: list[str], size: int = SCENE_SIZE) -> list[list[str]]:
    """Fixed windows of `size`; the last window may be shorter."""
    return [sentences[i:i + size] for i in range(0, len(sentences), size)]


def detect_setting(text: str) -> str:
    """First setting word found anywhere in the text, else "magical place"."""
    lowered = text.lower()
    for setting in SETTINGS:
        if setting in lowered:
            return setting
    return DEFAULT_SETTING
