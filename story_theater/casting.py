"""Casting: turns picked story elements into speaking characters.

Only "characters" and "animals" elements become cast members, in the order
the child picked them. Each gets:

  voice archetype  round-robin over ARCHETYPE_ROTATION (position mod 4)
  personality      fixed tags by category (PERSONALITY_BY_CATEGORY)
  dialogue style   by label (DIALOGUE_STYLE_BY_LABEL), else "warm and friendly"

A story with no qualifying elements is told by a single synthesized Narrator
(narrator-classic), so the dialogue composer always has a speaker.

The voice catalog (VOICE_PROFILES) describes all six archetypes with the
pitch/speed/style a speech backend can use to render them.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from story_theater.models import Character, Story, StoryElement, VoiceArchetype

CAST_CATEGORIES = ("characters", "animals")

ARCHETYPE_ROTATION: tuple[VoiceArchetype, ...] = (
    "child-hero",
    "friendly-animal",
    "wise-mentor",
    "magical-creature",
)

PERSONALITY_BY_CATEGORY: dict[str, list[str]] = {
    "characters": ["brave", "kind", "curious", "adventurous"],
    "animals": ["loyal", "playful", "wise", "protective"],
}

DIALOGUE_STYLE_BY_LABEL: dict[str, str] = {
    "Girl": "cheerful and confident",
    "Boy": "enthusiastic and brave",
    "Princess": "elegant and kind",
    "Dog": "loyal and excited",
    "Cat": "clever and independent",
    "Lion": "noble and strong",
}

DEFAULT_DIALOGUE_STYLE = "warm and friendly"

NARRATOR_ID = "narrator"


class VoiceProfile(BaseModel):
    """Catalog entry for one voice archetype."""

    model_config = ConfigDict(frozen=True)

    id: VoiceArchetype
    name: str
    description: str
    pitch: float
    speed: float
    style: str


VOICE_PROFILES: tuple[VoiceProfile, ...] = (
    VoiceProfile(id="child-hero", name="Brave Hero",
                 description="Energetic and courageous voice",
                 pitch=1.2, speed=1.1, style="energetic and brave"),
    VoiceProfile(id="wise-mentor", name="Wise Guide",
                 description="Calm and knowing voice",
                 pitch=0.8, speed=0.9, style="calm and knowing"),
    VoiceProfile(id="friendly-animal", name="Animal Friend",
                 description="Playful and warm voice",
                 pitch=1.3, speed=1.2, style="playful and warm"),
    VoiceProfile(id="magical-creature", name="Magic Being",
                 description="Mystical and enchanting voice",
                 pitch=1.4, speed=1.0, style="mystical and enchanting"),
    VoiceProfile(id="villain-reformed", name="Reformed Villain",
                 description="Dramatic but kind voice",
                 pitch=0.9, speed=1.0, style="dramatic but kind"),
    VoiceProfile(id="narrator-classic", name="Story Narrator",
                 description="Classic storytelling voice",
                 pitch=1.0, speed=1.0, style="storytelling and engaging"),
)


def get_available_voice_archetypes() -> list[VoiceProfile]:
    """Return the static voice catalog, in declaration order."""
    return list(VOICE_PROFILES)


def voice_profile(archetype: VoiceArchetype) -> VoiceProfile:
    for profile in VOICE_PROFILES:
        if profile.id == archetype:
            return profile
    raise KeyError(archetype)


def slugify(label: str) -> str:
    """Convert a label to an id-safe slug.

    "Big Bad Wolf" → "big-bad-wolf"
    """
    text = unicodedata.normalize("NFKD", label)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r"['\"]", "", text)
    text = re.sub(r"[^a-z0-9]+", "-", text)
    text = text.strip("-")
    return text or "unnamed"


def new_narrator() -> Character:
    return Character(
        id=NARRATOR_ID,
        name="Narrator",
        voice_archetype="narrator-classic",
        personality=("wise", "engaging", "storytelling"),
        dialogue_style="descriptive and engaging",
        visual_description="The story narrator",
    )


def _character_from_element(element: StoryElement, position: int) -> Character:
    if element.id:
        char_id = f"char-{element.id}"
    else:
        char_id = f"char-{position}-{slugify(element.label)}"
    return Character(
        id=char_id,
        name=element.label,
        voice_archetype=ARCHETYPE_ROTATION[position % len(ARCHETYPE_ROTATION)],
        personality=tuple(PERSONALITY_BY_CATEGORY[element.category]),
        dialogue_style=DIALOGUE_STYLE_BY_LABEL.get(element.label, DEFAULT_DIALOGUE_STYLE),
        visual_description=f"A {element.semantic_meaning or element.label}",
    )


def build_cast(story: Story | None, elements: Iterable[StoryElement]) -> list[Character]:
    """Derive the cast from the picked elements.

    The story text is not consulted; it is accepted so callers can hand over
    the same inputs they pass to create_performance().
    """
    cast_elements = [e for e in elements if e.category in CAST_CATEGORIES]
    characters = [
        _character_from_element(element, position)
        for position, element in enumerate(cast_elements)
    ]
    if not characters:
        characters.append(new_narrator())
    return characters
