from coach_calendar.storage.base import BookingStore
from coach_calendar.storage.fallback import FallbackBookingStore
from coach_calendar.storage.local import JsonFileBookingStore
from coach_calendar.storage.memory import InMemoryBookingStore

__all__ = [
    "BookingStore",
    "InMemoryBookingStore",
    "JsonFileBookingStore",
    "FallbackBookingStore",
]
