"""Performance builder: story + picked elements → immutable Performance."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from story_theater.casting import build_cast
from story_theater.models import Performance, Scene, Story, StoryElement

from .dialogue import compose_dialogue
from .interactions import plan_interactive_elements, scene_prompts
from .segments import detect_setting, group_sentences, split_sentences

logger = logging.getLogger(__name__)


def create_performance(
    story: Story | dict[str, Any],
    elements: Iterable[StoryElement | dict[str, Any]],
) -> Performance:
    """Build the cast, scenes and interactive elements for one story.

    Plain dicts are validated into models first. Apart from the performance
    id, timestamp and the randomly picked scene prompt, the result depends
    only on the inputs.
    """
    story = Story.model_validate(story)
    picked = [StoryElement.model_validate(e) for e in elements]

    characters = build_cast(story, picked)
    cast_ids = [c.id for c in characters]

    scenes: list[Scene] = []
    for order, window in enumerate(group_sentences(split_sentences(story.content))):
        scenes.append(Scene(
            id=f"scene-{order}",
            order=order,
            setting=detect_setting(". ".join(window)),
            characters=list(cast_ids),
            dialogue=compose_dialogue(window, characters),
            interactive_prompts=scene_prompts(characters),
        ))

    performance = Performance(
        story_id=story.id,
        characters=characters,
        scenes=scenes,
        interactive_elements=plan_interactive_elements(scenes),
    )
    logger.debug(
        "performance built story=%s characters=%d scenes=%d lines=%d",
        story.id, len(characters), len(scenes),
        sum(len(s.dialogue) for s in scenes),
    )
    return performance
