"""Sentence → DialogueLine conversion.

Every sentence of a scene becomes one line. A sentence is narration when it
contains a storyteller phrase ("once upon", "there was", "and so"); narration
goes to the narrator voice unchanged. Anything else is character speech:

  speaker   cast[sentence index mod cast size], indexed over ALL sentences
            of the scene, narration included
  text      third-person pronouns rewritten to first person, then one
            personality clause (brave > wise > playful)
  emotion   first matching keyword group in EMOTION_RULES, else neutral
  prompt    the scene's last sentence, if it is speech, asks "What happens next?"
"""

import re

from story_theater.models import Character, DialogueLine, EmotionType

NARRATION_MARKERS = ("once upon", "there was", "and so")

NARRATION_PAUSE_MS = 1000
SPEECH_PAUSE_MS = 800

NEXT_PROMPT = "What happens next?"

# Applied in order; "her" is claimed by the possessive rule first.
PRONOUN_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b(?:he|she|they)\b", re.IGNORECASE), "I"),
    (re.compile(r"\b(?:his|her|their)\b", re.IGNORECASE), "my"),
    (re.compile(r"\b(?:him|her|them)\b", re.IGNORECASE), "me"),
]

# (personality tag, clause): first tag the character has wins
PERSONALITY_CLAUSES: list[tuple[str, str]] = [
    ("brave", "I'm ready for this adventure!"),
    ("wise", "This teaches us something important."),
    ("playful", "This is so much fun!"),
]

# Priority order matters: first group with a matching keyword wins.
EMOTION_RULES: list[tuple[EmotionType, tuple[str, ...]]] = [
    ("happy", ("happy", "joy", "smile")),
    ("sad", ("sad", "cry", "tear")),
    ("angry", ("angry", "mad", "furious")),
    ("scared", ("scared", "afraid", "frightened")),
    ("excited", ("excited", "amazing", "wonderful")),
    ("surprised", ("surprised", "wow", "incredible")),
]


def is_narration(sentence: str) -> bool:
    lowered = sentence.lower()
    return any(marker in lowered for marker in NARRATION_MARKERS)


def detect_emotion(text: str) -> EmotionType:
    """Keyword scan (substring, case-insensitive). Defaults to neutral."""
    lowered = text.lower()
    for emotion, keywords in EMOTION_RULES:
        if any(keyword in lowered for keyword in keywords):
            return emotion
    return "neutral"


def to_character_speech(text: str, character: Character) -> str:
    """Rewrite narrative text as something the character says themselves."""
    speech = text
    for pattern, replacement in PRONOUN_RULES:
        speech = pattern.sub(replacement, speech)
    for tag, clause in PERSONALITY_CLAUSES:
        if tag in character.personality:
            return f"{speech} {clause}"
    return speech


def narrator_for(cast: list[Character]) -> Character:
    """The dedicated narrator if the cast has one, else the first character."""
    for c in cast:
        if c.voice_archetype == "narrator-classic":
            return c
    return cast[0]


def compose_dialogue(sentences: list[str], cast: list[Character]) -> list[DialogueLine]:
    """Convert one scene's sentences into ordered dialogue lines.

    `cast` must not be empty; build_cast() always yields at least a narrator.
    """
    if not cast:
        raise ValueError("Cannot compose dialogue without a cast")

    narrator = narrator_for(cast)
    last = len(sentences) - 1
    lines: list[DialogueLine] = []

    for index, raw in enumerate(sentences):
        sentence = raw.strip()
        if is_narration(sentence):
            lines.append(DialogueLine(
                character_id=narrator.id,
                text=sentence,
                emotion="neutral",
                pause_after_ms=NARRATION_PAUSE_MS,
            ))
            continue

        speaker = cast[index % len(cast)]
        lines.append(DialogueLine(
            character_id=speaker.id,
            text=to_character_speech(sentence, speaker),
            emotion=detect_emotion(sentence),
            pause_after_ms=SPEECH_PAUSE_MS,
            interactive_prompt=NEXT_PROMPT if index == last else None,
        ))

    return lines
