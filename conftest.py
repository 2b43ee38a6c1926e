from typing import Callable

import pytest

from story_theater.models import Story, StoryElement

MIA_STORY = "Once upon a time, there was a brave girl. She found a castle. She felt happy."


class RecordingSpeech:
    """Speech fake: remembers every call, plays nothing."""

    def __init__(self, fail: bool = False) -> None:
        self.spoken: list[tuple[str, str, str]] = []
        self.stops = 0
        self._fail = fail

    def speak(self, text: str, emotion: str, language: str) -> None:
        self.spoken.append((text, emotion, language))
        if self._fail:
            raise RuntimeError("speaker unplugged")

    def stop(self) -> None:
        self.stops += 1


class RecordingSleep:
    """Sleep fake: records requested durations and returns immediately.

    `on_call` runs before the n-th sleep returns, which lets a test stop the
    director while a wait is in progress.
    """

    def __init__(self) -> None:
        self.durations: list[float] = []
        self.hooks: dict[int, Callable[[], None]] = {}

    def at(self, call_number: int, hook) -> None:
        self.hooks[call_number] = hook

    async def __call__(self, seconds: float) -> None:
        self.durations.append(seconds)
        hook = self.hooks.get(len(self.durations))
        if hook:
            hook()


@pytest.fixture
def mia_story() -> Story:
    return Story(id="story-1", title="Mia and the Castle", content=MIA_STORY, mood="happy")


@pytest.fixture
def mia_elements() -> list[StoryElement]:
    return [StoryElement(id="mia", category="characters", label="Mia")]


@pytest.fixture
def speech() -> RecordingSpeech:
    return RecordingSpeech()


@pytest.fixture
def failing_speech() -> RecordingSpeech:
    return RecordingSpeech(fail=True)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()
