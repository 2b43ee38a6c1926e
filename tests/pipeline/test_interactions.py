"""Tests for scene prompts and performance-level interactive elements."""

from unittest.mock import patch

from story_theater.casting import new_narrator
from story_theater.models import Character, Scene
from story_theater.pipeline import plan_interactive_elements, prompt_templates, scene_prompts


def _mia() -> Character:
    return Character(id="char-mia", name="Mia", voice_archetype="child-hero")


def test_templates_name_first_character():
    templates = prompt_templates([_mia(), new_narrator()])
    assert len(templates) == 5
    assert templates[0] == "What do you think Mia should do next?"


def test_templates_fall_back_to_our_hero():
    assert prompt_templates([])[0] == "What do you think our hero should do next?"


def test_scene_prompts_pick_one_template():
    prompts = scene_prompts([_mia()])
    assert len(prompts) == 1
    assert prompts[0] in prompt_templates([_mia()])


def test_scene_prompts_use_random_choice():
    with patch("story_theater.pipeline.interactions.random.choice", side_effect=lambda seq: seq[-1]):
        prompts = scene_prompts([_mia()])
    assert prompts == ["Show me how you would move like this character!"]


def test_two_elements_per_scene_in_order():
    scenes = [Scene(id=f"scene-{i}", order=i, setting="home") for i in range(3)]
    elements = plan_interactive_elements(scenes)
    assert [e.id for e in elements] == [
        "choice-0", "emotion-0", "choice-1", "emotion-1", "choice-2", "emotion-2",
    ]


def test_choice_element():
    choice = plan_interactive_elements([Scene(id="scene-0", order=0, setting="home")])[0]
    assert choice.type == "choice"
    assert choice.prompt == "What should happen next?"
    assert choice.options == ("Continue the adventure", "Take a different path", "Meet a new friend")


def test_emotion_check_element():
    check = plan_interactive_elements([Scene(id="scene-0", order=0, setting="home")])[1]
    assert check.type == "emotion-check"
    assert check.prompt == "How does this part make you feel?"
    assert check.options is None


def test_no_scenes_no_elements():
    assert plan_interactive_elements([]) == []
