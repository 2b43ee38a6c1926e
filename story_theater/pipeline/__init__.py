"""Performance building pipeline.

Turns one generated story plus the child's picked elements into a Performance:
  1. Cast: characters/animals elements become speaking roles (casting.py).
  2. Segments: the story text is split into sentences, grouped 3 per scene.
  3. Dialogue: each sentence becomes a narration or character-speech line.
  4. Interactions: one random prompt per scene, plus a choice and an emotion
     check per scene on the performance.

Dialogue line format:
  {"character_id": ..., "text": ..., "emotion": ..., "pause_after_ms": ...,
   "interactive_prompt"?: "What happens next?"}
"""

from .core import create_performance  # noqa: F401
from .dialogue import (  # noqa: F401
    compose_dialogue,
    detect_emotion,
    is_narration,
    to_character_speech,
)
from .interactions import (  # noqa: F401
    plan_interactive_elements,
    prompt_templates,
    scene_prompts,
)
from .segments import (  # noqa: F401
    detect_setting,
    group_sentences,
    split_sentences,
)
