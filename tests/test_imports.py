"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""

import pytest


class TestSchemaImports:
    def test_import_booking_schema(self):
        from coach_calendar.schemas.booking_schema import Booking, BookingConflict, CallType
        assert CallType.FOLLOW_UP == "follow-up"
        assert Booking is not None
        assert BookingConflict(has_conflict=False).conflicting_bookings == []

    def test_import_client_schema(self):
        from coach_calendar.schemas.client_schema import Client
        assert Client(name="Amit Singh", phone="+91-9876543214").id is None


class TestSchedulingImports:
    def test_package_reexports(self):
        from coach_calendar.scheduling import (
            SchedulingFacade,
            applies_on,
            check_conflicts,
            generate_slots,
            is_available,
        )
        assert len(generate_slots()) == 28
        assert callable(applies_on)
        assert callable(is_available)
        assert callable(check_conflicts)
        assert SchedulingFacade is not None

    def test_facade_module(self):
        from coach_calendar.scheduling.facade import CalendarSummary, ScheduleRow
        assert "total_bookings" in CalendarSummary.__annotations__
        assert ScheduleRow is not None


class TestStorageImports:
    def test_package_reexports(self):
        from coach_calendar.storage import (
            BookingStore,
            FallbackBookingStore,
            InMemoryBookingStore,
            JsonFileBookingStore,
        )
        assert isinstance(InMemoryBookingStore(), BookingStore)
        assert FallbackBookingStore is not None
        assert JsonFileBookingStore is not None


class TestInfrastructureImports:
    def test_import_errors(self):
        from coach_calendar.errors import (
            NotFoundError,
            SchedulingError,
            SlotConflictError,
            StoreUnavailableError,
        )
        assert issubclass(NotFoundError, LookupError)
        for error in (NotFoundError, SlotConflictError, StoreUnavailableError):
            assert issubclass(error, SchedulingError)

    def test_import_config(self):
        from coach_calendar.config import settings
        assert settings.storage.backend in ("memory", "local")

    def test_logging_context(self):
        import logging

        from coach_calendar.logging_context import (
            get_request_id,
            get_request_logger,
            set_request_id,
        )
        assert set_request_id("REQ-test01") == "REQ-test01"
        assert get_request_id() == "REQ-test01"
        logger = get_request_logger("coach_calendar.test")
        record = logging.LogRecord("coach_calendar.test", logging.INFO, __file__, 1, "msg", None, None)
        assert all(f.filter(record) for f in logger.filters)
        assert record.request_id == "REQ-test01"

    def test_generated_request_id(self):
        from coach_calendar.logging_context import set_request_id
        assert set_request_id().startswith("REQ-")

    def test_handler_formats_request_id_for_plain_loggers(self):
        import io
        import logging

        from coach_calendar.logging_context import LOG_FORMAT, attach_request_id, set_request_id

        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        attach_request_id(handler)
        attach_request_id(handler)
        assert len(handler.filters) == 1

        logger = logging.getLogger("coach_calendar.test.plain")
        logger.addHandler(handler)
        try:
            set_request_id("REQ-abc123")
            logger.warning("Primary store unavailable")
        finally:
            logger.removeHandler(handler)
        assert "[REQ-abc123] WARNING: Primary store unavailable" in stream.getvalue()

    @pytest.mark.asyncio
    async def test_store_loggers_carry_request_id(self, caplog):
        from coach_calendar.logging_context import set_request_id
        from coach_calendar.storage import FallbackBookingStore, InMemoryBookingStore
        from tests.conftest import UnavailableStore

        set_request_id("REQ-fb0001")
        store = FallbackBookingStore(UnavailableStore(), InMemoryBookingStore())
        with caplog.at_level("WARNING", logger="coach_calendar.storage.fallback"):
            await store.list_clients()
        assert [r.request_id for r in caplog.records] == ["REQ-fb0001"]
