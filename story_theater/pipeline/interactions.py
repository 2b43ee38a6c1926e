"""Interactive prompts for scenes and the performance.

Both are templated placeholders: nothing here reads the scene content, and
the child's answers are never fed back into the story.
"""

import random

from story_theater.models import Character, InteractiveElement, Scene

FALLBACK_HERO = "our hero"

CHOICE_PROMPT = "What should happen next?"
CHOICE_OPTIONS = [
    "Continue the adventure",
    "Take a different path",
    "Meet a new friend",
]

EMOTION_CHECK_PROMPT = "How does this part make you feel?"


def prompt_templates(cast: list[Character]) -> list[str]:
    """All five scene prompt templates, filled in for this cast."""
    hero = cast[0].name if cast else FALLBACK_HERO
    return [
        f"What do you think {hero} should do next?",
        "How would you feel in this situation?",
        "What would you say to help?",
        "Can you make the sound this character would make?",
        "Show me how you would move like this character!",
    ]


def scene_prompts(cast: list[Character]) -> list[str]:
    """One randomly chosen prompt for a scene."""
    return [random.choice(prompt_templates(cast))]


def plan_interactive_elements(scenes: list[Scene]) -> list[InteractiveElement]:
    """A choice and an emotion check per scene, in scene order."""
    elements: list[InteractiveElement] = []
    for index, _scene in enumerate(scenes):
        elements.append(InteractiveElement(
            id=f"choice-{index}",
            type="choice",
            prompt=CHOICE_PROMPT,
            options=tuple(CHOICE_OPTIONS),
        ))
        elements.append(InteractiveElement(
            id=f"emotion-{index}",
            type="emotion-check",
            prompt=EMOTION_CHECK_PROMPT,
        ))
    return elements
