"""
promiseifyish.demo - Callback vs Future Walkthrough

Runs the same sequence of settings operations twice, once through the
callback API of SettingsManager and once through a promiseified
SettingsManager, and prints the transcript of each.

Usage:
    python -m promiseifyish.demo
    python -m promiseifyish.demo --log-level DEBUG
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any

from promiseifyish.core import Deferred, promiseify
from promiseifyish.settings import get_settings
from promiseifyish.settings_manager import SettingsManager

logger = logging.getLogger(__name__)

FIRST_SAVE = {"one": 1, "two": "two"}
SECOND_SAVE = {"three": 3, "two": 2}


class Transcript:
    """Accumulates operation entries for display."""

    def __init__(self, title: str) -> None:
        self.title = title
        self.entries: list[str] = []

    def append(self, name: str, body: Any = None) -> None:
        rendered = json.dumps(body, indent=2) if body else ""
        self.entries.append(f"{name}\n{rendered}\n=====\n")

    def render(self) -> str:
        return f"## {self.title}\n" + "".join(self.entries)


async def run_callback_flow(manager: SettingsManager, transcript: Transcript) -> None:
    """load, save, load, save, load using nested callbacks."""
    finished = Deferred()

    def on_error(*reason: Any) -> None:
        logger.error("Callback flow failed", extra={"reason": list(reason)})
        finished.error(RuntimeError(*reason))

    def on_settings_loaded(settings: dict[str, Any]) -> None:
        transcript.append("on_settings_loaded", settings)

    def on_settings_saved() -> None:
        transcript.append("on_settings_saved")

    def on_first_load(settings: dict[str, Any]) -> None:
        on_settings_loaded(settings)
        manager.save(FIRST_SAVE, on_first_save, on_error)

    def on_first_save(_settings: dict[str, Any]) -> None:
        on_settings_saved()
        manager.load(on_second_load, on_error)

    def on_second_load(settings: dict[str, Any]) -> None:
        on_settings_loaded(settings)
        manager.save(SECOND_SAVE, on_second_save, on_error)

    def on_second_save(_settings: dict[str, Any]) -> None:
        on_settings_saved()
        manager.load(on_third_load, on_error)

    def on_third_load(settings: dict[str, Any]) -> None:
        on_settings_loaded(settings)
        finished.done()

    manager.load(on_first_load, on_error)
    await finished.future


async def run_promiseified_flow(manager: Any, transcript: Transcript) -> None:
    """load, save, load, save, load by awaiting a promiseified manager.

    Each awaited call yields the list of values its callback received.
    """
    [settings] = await manager.load()
    transcript.append("on_settings_loaded", settings)
    await manager.save(FIRST_SAVE)
    transcript.append("on_settings_saved")
    [settings] = await manager.load()
    transcript.append("on_settings_loaded", settings)
    await manager.save(SECOND_SAVE)
    transcript.append("on_settings_saved")
    [settings] = await manager.load()
    transcript.append("on_settings_loaded", settings)


async def run_demo() -> tuple[Transcript, Transcript]:
    """Run both flows concurrently against separate managers.

    Returns:
        Tuple of (callback transcript, promiseified transcript).
    """
    standard = Transcript("callbacks")
    promiseified = Transcript("promiseified")

    await asyncio.gather(
        run_callback_flow(SettingsManager(), standard),
        run_promiseified_flow(promiseify(SettingsManager()), promiseified),
    )
    return standard, promiseified


def build_parser() -> argparse.ArgumentParser:
    """Build the demo argument parser."""
    parser = argparse.ArgumentParser(
        prog="promiseifyish-demo",
        description="Compare callback and promiseified use of SettingsManager",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: PROMISEIFYISH_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Demo entry point."""
    args = build_parser().parse_args(argv)
    log_level = args.log_level or get_settings().log_level

    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    standard, promiseified = asyncio.run(run_demo())
    print(standard.render())
    print(promiseified.render())


if __name__ == "__main__":
    main()
