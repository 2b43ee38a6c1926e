"""Story Theater: play a story file as a performance in the terminal."""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv

from story_theater import (
    HttpSpeech,
    PerformanceDirector,
    SilentSpeech,
    create_performance,
    load_settings,
)

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")


def parse_element(raw: str) -> dict:
    """Parse a CATEGORY:LABEL argument, e.g. animals:Dog."""
    category, sep, label = raw.partition(":")
    if not sep or not label.strip():
        raise argparse.ArgumentTypeError(f"expected CATEGORY:LABEL, got {raw!r}")
    return {"category": category.strip(), "label": label.strip()}


async def _no_wait(seconds: float) -> None:
    await asyncio.sleep(0)


async def perform(story_path: Path, elements: list[dict], fast: bool) -> None:
    settings = load_settings(ROOT / ".env")

    if settings.speech_provider_url:
        speech = HttpSpeech(
            settings.speech_provider_url,
            api_key=settings.speech_api_key,
            voice_id=settings.speech_voice_id,
        )
    else:
        speech = SilentSpeech()

    story = {"id": story_path.stem, "title": story_path.stem, "content": story_path.read_text()}
    performance = create_performance(story, elements)
    director = PerformanceDirector(speech, settings, sleep=_no_wait if fast else asyncio.sleep)

    def shutdown(*_):
        print("\nStopping performance...")
        director.stop_performance()

    loop = asyncio.get_running_loop()
    handled: list[signal.Signals] = []
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown)
            handled.append(sig)
        except NotImplementedError:
            # Windows: Ctrl+C falls through to KeyboardInterrupt
            pass

    print(f"Cast: {', '.join(f'{c.name} ({c.voice_archetype})' for c in performance.characters)}")
    try:
        await director.start_performance(
            performance,
            on_scene_start=lambda scene: print(f"\n── Scene {scene.order + 1} · {scene.setting} ──"),
            on_dialogue=lambda line, char: print(f"{char.name}({line.emotion}): {line.text}"),
            on_interactive=lambda element: print(f"  ? {element.prompt}"),
            on_complete=lambda: print("\nThe End."),
        )
    finally:
        for sig in handled:
            loop.remove_signal_handler(sig)


def main():
    parser = argparse.ArgumentParser(description="Story Theater performance runner")
    parser.add_argument("story", type=Path, help="Plain-text story file")
    parser.add_argument("-e", "--element", dest="elements", action="append",
                        type=parse_element, default=[],
                        help="Picked story element as CATEGORY:LABEL (repeatable)")
    parser.add_argument("--fast", action="store_true",
                        help="Skip all speech and interaction waits")
    parser.add_argument("--verbose", action="store_true",
                        help="Log playback details to stderr")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.story.is_file():
        print(f"Story file not found: {args.story}", file=sys.stderr)
        sys.exit(1)

    asyncio.run(perform(args.story, args.elements, args.fast))


if __name__ == "__main__":
    main()
