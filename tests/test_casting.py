"""Tests for story_theater.casting."""

import pytest

from story_theater.casting import (
    VOICE_PROFILES,
    build_cast,
    get_available_voice_archetypes,
    slugify,
    voice_profile,
)
from story_theater.models import StoryElement


def _el(category: str, label: str, **kw) -> StoryElement:
    return StoryElement(category=category, label=label, **kw)


# ── build_cast ──────────────────────────────────────────────


def test_only_characters_and_animals_are_cast():
    cast = build_cast(None, [
        _el("places", "Forest"),
        _el("characters", "Girl"),
        _el("food", "Cake"),
        _el("animals", "Dog"),
    ])
    assert [c.name for c in cast] == ["Girl", "Dog"]


def test_archetypes_rotate_by_position():
    labels = ["A", "B", "C", "D", "E", "F"]
    cast = build_cast(None, [_el("characters", name) for name in labels])
    assert [c.voice_archetype for c in cast] == [
        "child-hero", "friendly-animal", "wise-mentor", "magical-creature",
        "child-hero", "friendly-animal",
    ]


def test_rotation_counts_only_qualifying_elements():
    cast = build_cast(None, [_el("places", "Home"), _el("animals", "Cat")])
    assert cast[0].voice_archetype == "child-hero"


def test_personality_by_category():
    cast = build_cast(None, [_el("characters", "Boy"), _el("animals", "Lion")])
    assert cast[0].personality == ("brave", "kind", "curious", "adventurous")
    assert cast[1].personality == ("loyal", "playful", "wise", "protective")


@pytest.mark.parametrize("label,style", [
    ("Girl", "cheerful and confident"),
    ("Boy", "enthusiastic and brave"),
    ("Princess", "elegant and kind"),
    ("Dog", "loyal and excited"),
    ("Cat", "clever and independent"),
    ("Lion", "noble and strong"),
    ("Dragon", "warm and friendly"),
])
def test_dialogue_style_lookup(label, style):
    cast = build_cast(None, [_el("animals", label)])
    assert cast[0].dialogue_style == style


def test_dialogue_style_lookup_is_exact_case():
    cast = build_cast(None, [_el("characters", "girl")])
    assert cast[0].dialogue_style == "warm and friendly"


def test_character_id_from_element_id():
    cast = build_cast(None, [_el("characters", "Mia", id="sym-7")])
    assert cast[0].id == "char-sym-7"


def test_character_id_without_element_id_is_deterministic():
    elements = [_el("characters", "Big Bad Wolf"), _el("characters", "Big Bad Wolf")]
    first = build_cast(None, elements)
    second = build_cast(None, elements)
    assert [c.id for c in first] == ["char-0-big-bad-wolf", "char-1-big-bad-wolf"]
    assert first == second


def test_visual_description_prefers_semantic_meaning():
    cast = build_cast(None, [
        _el("animals", "Dog", semantic_meaning="loyal puppy"),
        _el("animals", "Cat"),
    ])
    assert cast[0].visual_description == "A loyal puppy"
    assert cast[1].visual_description == "A Cat"


def test_no_cast_elements_synthesizes_narrator():
    cast = build_cast(None, [_el("places", "Beach"), _el("weather", "Rain")])
    assert len(cast) == 1
    narrator = cast[0]
    assert narrator.name == "Narrator"
    assert narrator.voice_archetype == "narrator-classic"
    assert narrator.id == "narrator"


def test_empty_elements_synthesizes_narrator():
    cast = build_cast(None, [])
    assert [(c.name, c.voice_archetype) for c in cast] == [("Narrator", "narrator-classic")]


# ── voice catalog ───────────────────────────────────────────


def test_catalog_lists_all_six_archetypes_in_order():
    ids = [p.id for p in get_available_voice_archetypes()]
    assert ids == [
        "child-hero", "wise-mentor", "friendly-animal",
        "magical-creature", "villain-reformed", "narrator-classic",
    ]


def test_catalog_is_a_copy():
    catalog = get_available_voice_archetypes()
    catalog.clear()
    assert len(get_available_voice_archetypes()) == len(VOICE_PROFILES) == 6


def test_voice_profile_lookup():
    profile = voice_profile("wise-mentor")
    assert profile.name == "Wise Guide"
    assert profile.pitch == 0.8
    assert profile.speed == 0.9


def test_voice_profile_unknown():
    with pytest.raises(KeyError):
        voice_profile("pirate-captain")


# ── slugify ─────────────────────────────────────────────────


def test_slugify():
    assert slugify("Big Bad Wolf") == "big-bad-wolf"
    assert slugify("Señor Gato's Hat") == "senor-gatos-hat"
    assert slugify("!!!") == "unnamed"
