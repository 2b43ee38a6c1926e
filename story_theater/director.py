"""Performance director: plays one Performance scene by scene, line by line.

Playback flow:
  1. Reject the run if this director is already performing. A run that was
     stopped but has not reached its next checkpoint does not count: the new
     run takes over and the old one exits quietly at its checkpoint.
  2. For each scene (checkpoint: stop requested → exit without on_complete):
       on_scene_start(scene)
  3.   For each dialogue line (checkpoint):
         on_dialogue(line, character)
         speech.speak(text, emotion, language)        fire-and-forget
         wait len(text) × ms_per_character + pause_after_ms
         if the line carries a prompt → on_interactive(voice-response), fixed wait
  4.   For each scene-level prompt (checkpoint) → on_interactive, fixed wait.
  5. All scenes played → on_complete().

Cancellation is cooperative. stop_performance() only marks the run's token;
a wait already in progress runs to its end and the next checkpoint exits.

Speech timing is an estimate. The speech backend gives no completion signal,
so the director never knows whether audio actually played.

One director plays one performance at a time. Build a new director per
logical performance rather than sharing one across callers.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from story_theater.config import Settings
from story_theater.models import Character, DialogueLine, InteractiveElement, Performance, Scene
from story_theater.speech import Speech

logger = logging.getLogger(__name__)

SceneCallback = Callable[[Scene], None]
DialogueCallback = Callable[[DialogueLine, Character], None]
InteractiveCallback = Callable[[InteractiveElement], None]
CompleteCallback = Callable[[], None]
SpeechErrorCallback = Callable[[DialogueLine, Exception], None]
Sleep = Callable[[float], Awaitable[None]]


class DirectorState(str, Enum):
    IDLE = "idle"
    PERFORMING = "performing"
    SCENE_ACTIVE = "scene_active"
    SPEAKING = "speaking"
    AWAITING_INTERACTION = "awaiting_interaction"
    SCENE_INTERACTION_WAIT = "scene_interaction_wait"


class CancellationToken:
    """Stop flag for a single run, polled at the director's checkpoints."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class PerformanceAlreadyRunning(RuntimeError):
    """Raised when start_performance() is called on a director mid-run."""


class PerformanceDirector:
    """Sequential, cancellable playback of a Performance.

    Args:
        speech:   Speech collaborator; speak() must not block.
        settings: Timing and language. Defaults to Settings().
        sleep:    Awaitable used for every wait. Defaults to asyncio.sleep.
    """

    def __init__(
        self,
        speech: Speech,
        settings: Settings | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._speech = speech
        self._settings = settings or Settings()
        self._sleep = sleep
        self._token: CancellationToken | None = None
        self._state = DirectorState.IDLE
        self.current_scene_index = 0
        self.current_dialogue_index = 0
        self.current_performance: Performance | None = None

    @property
    def state(self) -> DirectorState:
        """Current playback state; a stopped run reads as idle at once."""
        if not self.is_currently_performing():
            return DirectorState.IDLE
        return self._state

    def is_currently_performing(self) -> bool:
        return self._token is not None and not self._token.cancelled

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    async def start_performance(
        self,
        performance: Performance,
        *,
        on_scene_start: SceneCallback | None = None,
        on_dialogue: DialogueCallback | None = None,
        on_interactive: InteractiveCallback | None = None,
        on_complete: CompleteCallback | None = None,
        on_speech_error: SpeechErrorCallback | None = None,
    ) -> None:
        """Play the performance to the end or until stop_performance()."""
        if self.is_currently_performing():
            raise PerformanceAlreadyRunning(
                "This director is already performing; stop it or use another director"
            )

        token = CancellationToken()
        self._token = token
        self.current_performance = performance
        self.current_scene_index = 0
        self.current_dialogue_index = 0
        self._state = DirectorState.PERFORMING
        logger.info(
            "performance started id=%s scenes=%d", performance.id, len(performance.scenes)
        )

        cast = {c.id: c for c in performance.characters}

        try:
            for scene_index, scene in enumerate(performance.scenes):
                if token.cancelled:
                    logger.info("performance stopped before scene %d", scene_index)
                    return
                self.current_scene_index = scene_index
                self.current_dialogue_index = 0
                self._state = DirectorState.SCENE_ACTIVE
                if on_scene_start:
                    on_scene_start(scene)

                for line_index, line in enumerate(scene.dialogue):
                    if token.cancelled:
                        logger.info(
                            "performance stopped at scene %d line %d", scene_index, line_index
                        )
                        return
                    self.current_dialogue_index = line_index
                    await self._perform_line(
                        line, cast[line.character_id],
                        on_dialogue=on_dialogue,
                        on_speech_error=on_speech_error,
                    )

                    if line.interactive_prompt:
                        if self._token is token:
                            self._state = DirectorState.AWAITING_INTERACTION
                        await self._interact(
                            InteractiveElement(
                                id=f"interactive-{scene_index}-{line_index}",
                                type="voice-response",
                                prompt=line.interactive_prompt,
                            ),
                            on_interactive,
                        )

                for prompt_index, prompt in enumerate(scene.interactive_prompts):
                    if token.cancelled:
                        logger.info("performance stopped at scene %d prompts", scene_index)
                        return
                    self._state = DirectorState.SCENE_INTERACTION_WAIT
                    await self._interact(
                        InteractiveElement(
                            id=f"prompt-{scene_index}-{prompt_index}",
                            type="voice-response",
                            prompt=prompt,
                        ),
                        on_interactive,
                    )

            if token.cancelled:
                logger.info("performance stopped after last scene")
                return
            logger.info("performance finished id=%s", performance.id)
            if on_complete:
                on_complete()
        finally:
            # a stopped run may outlive its stop; leave a newer run's state alone
            if self._token is token:
                self._token = None
                self._state = DirectorState.IDLE
                self.current_scene_index = 0
                self.current_dialogue_index = 0

    async def _perform_line(
        self,
        line: DialogueLine,
        character: Character,
        *,
        on_dialogue: DialogueCallback | None,
        on_speech_error: SpeechErrorCallback | None,
    ) -> None:
        self._state = DirectorState.SPEAKING
        if on_dialogue:
            on_dialogue(line, character)

        try:
            self._speech.speak(line.text, line.emotion, self._settings.language)
        except Exception as e:
            # No acknowledgement channel: report and keep the schedule.
            logger.warning("Speech failed for %s: %s", character.name, e)
            if on_speech_error:
                on_speech_error(line, e)

        duration = self._settings.speech_seconds(line.text, line.pause_after_ms)
        logger.debug(
            "line speaker=%s emotion=%s wait=%.2fs", character.id, line.emotion, duration
        )
        await self._sleep(duration)

    async def _interact(
        self, element: InteractiveElement, on_interactive: InteractiveCallback | None
    ) -> None:
        if on_interactive:
            on_interactive(element)
        await self._sleep(self._settings.interaction_seconds)

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def stop_performance(self) -> None:
        """Request a stop. Safe to call any number of times, even when idle."""
        if self._token is not None and not self._token.cancelled:
            self._token.cancel()
            logger.info("performance stop requested")
        try:
            self._speech.stop()
        except Exception as e:
            logger.warning("Speech stop failed: %s", e)
