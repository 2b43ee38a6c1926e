"""Core domain models.

Inputs (Story, StoryElement) arrive from the story generator and the symbol
picker. Everything the engine derives from them (Character, Scene,
DialogueLine, InteractiveElement, Performance) is frozen once built.
Pydantic is used for validation and serialisation at every data boundary.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

VoiceArchetype = Literal[
    "child-hero",
    "wise-mentor",
    "friendly-animal",
    "magical-creature",
    "villain-reformed",
    "narrator-classic",
]

EmotionType = Literal[
    "happy",
    "excited",
    "calm",
    "sad",
    "angry",
    "scared",
    "surprised",
    "silly",
    "neutral",
]

InteractiveType = Literal["choice", "voice-response", "action", "emotion-check"]

ElementCategory = Literal[
    "characters",
    "actions",
    "places",
    "objects",
    "emotions",
    "weather",
    "food",
    "animals",
]


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class Story(BaseModel):
    """A generated narrative. Only `content` drives the performance."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = ""
    content: str
    mood: EmotionType = "neutral"


class StoryElement(BaseModel):
    """A symbol the child picked for the story."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = ""
    category: ElementCategory
    label: str
    semantic_meaning: str | None = Field(default=None, alias="semanticMeaning")


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------

class Character(BaseModel):
    """A speaking role in the performance."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    voice_archetype: VoiceArchetype
    personality: tuple[str, ...] = ()
    dialogue_style: str = "warm and friendly"
    visual_description: str = ""


class DialogueLine(BaseModel):
    """One attributed, timed utterance."""

    model_config = ConfigDict(frozen=True)

    character_id: str
    text: str
    emotion: EmotionType = "neutral"
    pause_after_ms: int = Field(default=0, ge=0)
    interactive_prompt: str | None = None


class Scene(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    order: int = Field(ge=0)
    setting: str
    characters: tuple[str, ...] = ()  # character ids
    dialogue: tuple[DialogueLine, ...] = ()
    interactive_prompts: tuple[str, ...] = ()


class InteractiveElement(BaseModel):
    """A prompt surfaced to the child. Responses are never interpreted."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: InteractiveType
    prompt: str
    options: tuple[str, ...] | None = None


class Performance(BaseModel):
    """Cast + scenes + interactive elements derived from one story."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    story_id: str
    characters: tuple[Character, ...]
    scenes: tuple[Scene, ...] = ()
    interactive_elements: tuple[InteractiveElement, ...] = ()
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode="after")
    def _check_integrity(self) -> Performance:
        for index, scene in enumerate(self.scenes):
            if scene.order != index:
                raise ValueError(
                    f"Scene {scene.id!r} has order {scene.order}, expected {index}"
                )
        cast_ids = {c.id for c in self.characters}
        for scene in self.scenes:
            for char_id in scene.characters:
                if char_id not in cast_ids:
                    raise ValueError(f"Scene {scene.id!r} lists unknown character {char_id!r}")
            for line in scene.dialogue:
                if line.character_id not in cast_ids:
                    raise ValueError(
                        f"Dialogue in scene {scene.id!r} references unknown character "
                        f"{line.character_id!r}"
                    )
        return self

    def character(self, character_id: str) -> Character:
        """Resolve a cast member by id. Raises KeyError if absent."""
        for c in self.characters:
            if c.id == character_id:
                return c
        raise KeyError(character_id)
