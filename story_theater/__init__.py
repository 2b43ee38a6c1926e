"""Interactive story performance engine.

A generated story plus the symbols a child picked become a Performance
(cast + scenes + interactive elements), which a PerformanceDirector plays
back scene by scene through a fire-and-forget speech backend.

    performance = create_performance(story, elements)
    director = PerformanceDirector(speech)
    await director.start_performance(performance, on_dialogue=...)
"""

# Re-export the public API so `from story_theater import ...` covers the common cases.

from .casting import (  # noqa: F401
    VoiceProfile,
    build_cast,
    get_available_voice_archetypes,
    voice_profile,
)
from .config import Settings, load_settings  # noqa: F401
from .director import (  # noqa: F401
    CancellationToken,
    DirectorState,
    PerformanceAlreadyRunning,
    PerformanceDirector,
)
from .models import (  # noqa: F401
    Character,
    DialogueLine,
    InteractiveElement,
    Performance,
    Scene,
    Story,
    StoryElement,
)
from .pipeline import create_performance  # noqa: F401
from .speech import HttpSpeech, SilentSpeech, Speech, SpeechError  # noqa: F401
