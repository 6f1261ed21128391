"""
Offline console calendar — drives the scheduling facade from the terminal.

Shows the day grid, books and cancels calls, and searches the client
directory using the real facade and whichever store ``main.build_store``
composes. No network calls. Designed for live demo walkthroughs.

Usage:
    python console_demo.py
    python console_demo.py --scenario booking
    python console_demo.py --scenario recurrence
"""

import argparse
import asyncio
import shlex
from datetime import date, timedelta
from typing import Optional

from coach_calendar.config import settings
from coach_calendar.directory import ClientDirectory
from coach_calendar.errors import NotFoundError, SchedulingError, SlotConflictError
from coach_calendar.logging_context import set_request_id
from coach_calendar.schemas.booking_schema import Booking, CallType
from coach_calendar.scheduling.facade import SchedulingFacade
from coach_calendar.scheduling.recurrence import next_occurrences
from coach_calendar.scheduling.time_grid import DAY_END, DAY_START, format_time_label

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

CALL_TYPE_ALIASES: dict[str, CallType] = {
    "onboarding": CallType.ONBOARDING,
    "onboard": CallType.ONBOARDING,
    "follow-up": CallType.FOLLOW_UP,
    "followup": CallType.FOLLOW_UP,
    "follow": CallType.FOLLOW_UP,
}

HELP_TEXT = """Commands:
  day YYYY-MM-DD | today | next | prev    show a day's schedule
  show [onboarding|follow-up]             re-show with availability for a call type
  clients [query]                         list or search clients
  add-client PHONE NAME...                create a client
  book CLIENT_ID onboarding|follow-up HH:MM
  cancel BOOKING_ID|last                  cancel a booking (whole series if weekly)
  upcoming BOOKING_ID|last                next dates a booking occupies
  summary                                 booking counts
  quit"""


class ConsoleSession:
    """Interactive calendar session for one coach."""

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "booking": [
            "day 2024-06-05",
            "book 1 onboarding 10:30",
            "book 2 follow-up 10:50",
            "book 2 follow-up 11:10",
            "show follow-up",
            "cancel last",
            "summary",
        ],
        "recurrence": [
            "day 2024-06-05",
            "book 3 follow-up 13:00",
            "upcoming last",
            "day 2024-06-12",
            "day 2024-06-04",
            "day 2024-06-11",
        ],
    }

    MAX_INPUT_LENGTH = 200

    def __init__(
        self,
        facade: SchedulingFacade,
        directory: ClientDirectory,
        today: Optional[date] = None,
    ) -> None:
        self.facade = facade
        self.directory = directory
        self.selected_date = today or date.today()
        self.call_type = CallType.ONBOARDING
        self.last_booking: Optional[Booking] = None

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def warn(self, text: str) -> None:
        print(f"{RED}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  COACH CALENDAR - {title}{RESET}")
        print(f"{BOLD}  Coach: {settings.calendar.coach_name}{RESET}")
        print(f"{BOLD}  Hours: {format_time_label(DAY_START)} - {format_time_label(DAY_END)}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    async def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            self.warn(f"Unknown scenario: {scenario}")
            return

        self._banner(f"Scenario: {scenario}")
        for step in steps:
            print(f"\n{BLUE}[Coach] {RESET}{step}")
            await self.process_input(step)

        print(f"\n{BOLD}  Scenario '{scenario}' complete.{RESET}")

    async def run(self) -> None:
        self._banner("Console")
        print(f"{DIM}  Type 'help' for commands, 'quit' to exit{RESET}")
        await self.show_day()

        while True:
            user_input = (await asyncio.to_thread(input, f"\n{BLUE}[Coach] {RESET}")).strip()
            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if len(user_input) > self.MAX_INPUT_LENGTH:
                self.warn("That command is too long.")
                continue
            await self.process_input(user_input)

    async def process_input(self, text: str) -> None:
        set_request_id()
        try:
            parts = shlex.split(text)
        except ValueError as exc:
            self.warn(f"Could not parse command: {exc}")
            return
        if not parts:
            return
        command, args = parts[0].lower(), parts[1:]

        try:
            if command == "day":
                await self._handle_day(args)
            elif command == "today":
                self.selected_date = date.today()
                await self.show_day()
            elif command in ("next", "prev"):
                step = 1 if command == "next" else -1
                self.selected_date += timedelta(days=step)
                await self.show_day()
            elif command == "show":
                await self._handle_show(args)
            elif command == "clients":
                await self._handle_clients(" ".join(args))
            elif command == "add-client":
                await self._handle_add_client(args)
            elif command == "book":
                await self._handle_book(args)
            elif command == "cancel":
                await self._handle_cancel(args)
            elif command == "upcoming":
                await self._handle_upcoming(args)
            elif command == "summary":
                await self._handle_summary()
            elif command == "help":
                print(HELP_TEXT)
            else:
                self.warn(f"Unknown command '{command}'. Type 'help' for commands.")
        except SchedulingError as exc:
            self.warn(str(exc))

    # ------------------------------------------------------------------ #
    # Schedule display
    # ------------------------------------------------------------------ #

    async def show_day(self) -> None:
        rows = await self.facade.day_schedule(self.selected_date, self.call_type)
        day = self.selected_date
        print(f"\n{BOLD}{day.strftime('%A, %d %B %Y')}{RESET} "
              f"{DIM}(availability for {self.call_type.label.lower()} calls){RESET}")
        for row in rows:
            label = f"{row.slot.display:>8}"
            if row.booking is not None:
                weekly = " weekly" if row.booking.is_recurring else ""
                print(
                    f"  {label}  {YELLOW}{row.booking.client_name}{RESET} "
                    f"{DIM}{row.booking.client_phone} · {row.booking.call_type.label}"
                    f"{weekly} · {row.booking.id}{RESET}"
                )
            elif row.available:
                print(f"  {label}  {GREEN}free{RESET}")
            else:
                print(f"  {label}  {DIM}busy{RESET}")

    async def _handle_day(self, args: list[str]) -> None:
        if len(args) != 1:
            self.warn("Usage: day YYYY-MM-DD")
            return
        try:
            self.selected_date = date.fromisoformat(args[0])
        except ValueError:
            self.warn(f"The date '{args[0]}' doesn't look right.")
            return
        await self.show_day()

    async def _handle_show(self, args: list[str]) -> None:
        if args:
            call_type = CALL_TYPE_ALIASES.get(args[0].lower())
            if call_type is None:
                self.warn(f"Unknown call type '{args[0]}'.")
                return
            self.call_type = call_type
        await self.show_day()

    # ------------------------------------------------------------------ #
    # Clients
    # ------------------------------------------------------------------ #

    async def _handle_clients(self, query: str) -> None:
        clients = await self.directory.search(query)
        if not clients:
            self.say("No matching clients.")
            return
        for client in clients:
            print(f"  {client.id:>12}  {client.name:<20} {DIM}{client.phone}{RESET}")

    async def _handle_add_client(self, args: list[str]) -> None:
        if len(args) < 2:
            self.warn("Usage: add-client PHONE NAME...")
            return
        try:
            client = await self.directory.create_client(name=" ".join(args[1:]), phone=args[0])
        except ValueError as exc:
            self.warn(str(exc))
            return
        self.say(f"Client {client.name} added with id {client.id}.")

    # ------------------------------------------------------------------ #
    # Booking
    # ------------------------------------------------------------------ #

    async def _handle_book(self, args: list[str]) -> None:
        if len(args) != 3:
            self.warn("Usage: book CLIENT_ID onboarding|follow-up HH:MM")
            return
        client_id, raw_type, time_slot = args
        call_type = CALL_TYPE_ALIASES.get(raw_type.lower())
        if call_type is None:
            self.warn(f"Unknown call type '{raw_type}'.")
            return

        try:
            booking = await self.facade.book(client_id, call_type, self.selected_date, time_slot)
        except SlotConflictError as exc:
            self.warn(f"Time conflict: {exc}")
            return
        except ValueError as exc:
            self.warn(str(exc))
            return

        self.last_booking = booking
        self.say(
            f"{call_type.label} call booked with {booking.client_name} at "
            f"{format_time_label(booking.time_slot)}. Reference: {booking.id}."
        )
        if booking.is_recurring:
            self.system_log(f"Repeats every {booking.anchor_date.strftime('%A')}")

    def _resolve_booking_id(self, args: list[str]) -> Optional[str]:
        if len(args) != 1:
            return None
        if args[0].lower() == "last":
            return self.last_booking.id if self.last_booking else None
        return args[0]

    async def _handle_cancel(self, args: list[str]) -> None:
        booking_id = self._resolve_booking_id(args)
        if booking_id is None:
            self.warn("Usage: cancel BOOKING_ID|last")
            return
        try:
            await self.facade.cancel(booking_id)
        except NotFoundError as exc:
            self.warn(str(exc))
            return
        if self.last_booking and self.last_booking.id == booking_id:
            self.last_booking = None
        self.say(f"Booking {booking_id} has been cancelled.")

    async def _handle_upcoming(self, args: list[str]) -> None:
        booking_id = self._resolve_booking_id(args)
        if booking_id is None:
            self.warn("Usage: upcoming BOOKING_ID|last")
            return
        bookings = await self.facade.store.list_all_bookings()
        booking = next((b for b in bookings if b.id == booking_id), None)
        if booking is None:
            raise NotFoundError("booking", booking_id)
        dates = next_occurrences(
            booking, self.selected_date, settings.calendar.upcoming_occurrences
        )
        if not dates:
            self.say(f"Booking {booking_id} has no occurrences from {self.selected_date}.")
            return
        for day in dates:
            print(f"  {day.strftime('%a %d %b %Y')}  {format_time_label(booking.time_slot)}")

    async def _handle_summary(self) -> None:
        stats = await self.facade.summary(self.selected_date)
        self.say(
            f"{stats['total_bookings']} bookings stored, "
            f"{stats['bookings_on_day']} on {self.selected_date}, "
            f"{stats['recurring_series']} weekly series."
        )


def main() -> None:
    from main import build_calendar

    parser = argparse.ArgumentParser(description="Offline console calendar")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    async def _run() -> None:
        facade, directory = await build_calendar(settings)
        session = ConsoleSession(facade, directory)
        if args.scenario:
            await session.run_scenario(args.scenario)
        else:
            await session.run()

    asyncio.run(_run())


if __name__ == "__main__":
    main()
