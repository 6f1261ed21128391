"""
Coach calendar entry point.

Composes the booking store selected by configuration, seeds the default
client list, and prints today's schedule or starts the console session.

Usage:
    Today's schedule: python main.py
    Console mode:     python main.py console
"""

import asyncio
import logging
import sys

from coach_calendar.config import AppConfig, settings
from coach_calendar.directory import ClientDirectory
from coach_calendar.scheduling.facade import SchedulingFacade
from coach_calendar.storage import (
    BookingStore,
    FallbackBookingStore,
    InMemoryBookingStore,
    JsonFileBookingStore,
)

logger = logging.getLogger(__name__)


def build_store(config: AppConfig) -> BookingStore:
    """Select the storage backend. The scheduling core never makes this choice."""
    if config.storage.backend == "memory":
        return InMemoryBookingStore()

    local = JsonFileBookingStore(config.storage.data_file)
    if not config.storage.fallback_enabled:
        return local
    return FallbackBookingStore(primary=local, fallback=InMemoryBookingStore())


async def build_calendar(config: AppConfig) -> tuple[SchedulingFacade, ClientDirectory]:
    store = build_store(config)
    directory = ClientDirectory(store)
    if config.storage.seed_default_clients:
        await directory.seed_default_clients()
    if isinstance(store, FallbackBookingStore):
        # The fallback serves the built-in clients while the local file is unreachable.
        await ClientDirectory(store.fallback).seed_default_clients()
    logger.info("Calendar ready (storage: %s)", type(store).__name__)
    return SchedulingFacade(store), directory


def _run_console_mode() -> None:
    """Start the interactive console session."""
    from console_demo import main as console_main

    sys.argv = [sys.argv[0]] + sys.argv[2:]
    console_main()


async def _print_today() -> None:
    from console_demo import ConsoleSession

    facade, directory = await build_calendar(settings)
    await ConsoleSession(facade, directory).show_day()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "console":
        _run_console_mode()
    else:
        asyncio.run(_print_today())
