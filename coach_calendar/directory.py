"""
Client directory backed by the booking store.

Lookups match on name or phone number; phone numbers are compared after
normalization so "+91-9876543210" and "+91 98765 43210" are the same
client.
"""

from typing import Optional

from coach_calendar.logging_context import get_request_logger
from coach_calendar.schemas.client_schema import Client
from coach_calendar.storage.base import BookingStore
from coach_calendar.utils import normalize_phone

logger = get_request_logger(__name__)

DEFAULT_CLIENTS: list[tuple[str, str, str, str]] = [
    ("1", "Sriram Kumar", "+91-9876543210", "sriram@example.com"),
    ("2", "Shilpa Sharma", "+91-9876543211", "shilpa@example.com"),
    ("3", "Rahul Gupta", "+91-9876543212", "rahul@example.com"),
    ("4", "Priya Patel", "+91-9876543213", "priya@example.com"),
    ("5", "Amit Singh", "+91-9876543214", "amit@example.com"),
    ("6", "Neha Agarwal", "+91-9876543215", "neha@example.com"),
    ("7", "Vikram Rao", "+91-9876543216", "vikram@example.com"),
    ("8", "Kavya Reddy", "+91-9876543217", "kavya@example.com"),
    ("9", "Arjun Mehta", "+91-9876543218", "arjun@example.com"),
    ("10", "Deepika Jain", "+91-9876543219", "deepika@example.com"),
    ("11", "Rohit Verma", "+91-9876543220", "rohit@example.com"),
    ("12", "Ananya Das", "+91-9876543221", "ananya@example.com"),
    ("13", "Karthik Nair", "+91-9876543222", "karthik@example.com"),
    ("14", "Pooja Iyer", "+91-9876543223", "pooja@example.com"),
    ("15", "Suresh Pillai", "+91-9876543224", "suresh@example.com"),
    ("16", "Meera Krishnan", "+91-9876543225", "meera@example.com"),
    ("17", "Rajesh Khanna", "+91-9876543226", "rajesh@example.com"),
    ("18", "Sneha Malhotra", "+91-9876543227", "sneha@example.com"),
    ("19", "Manoj Tiwari", "+91-9876543228", "manoj@example.com"),
    ("20", "Ritu Bansal", "+91-9876543229", "ritu@example.com"),
]


def default_clients() -> list[Client]:
    """Fresh Client records for the built-in demo list."""
    return [
        Client(id=client_id, name=name, phone=phone, email=email)
        for client_id, name, phone, email in DEFAULT_CLIENTS
    ]


class ClientDirectory:
    """Search and maintain the clients a coach can book."""

    def __init__(self, store: BookingStore) -> None:
        self._store = store

    async def list_clients(self) -> list[Client]:
        return await self._store.list_clients()

    async def get(self, client_id: str) -> Optional[Client]:
        for client in await self._store.list_clients():
            if client.id == client_id:
                return client
        return None

    async def search(self, query: str) -> list[Client]:
        """Case-insensitive name match, or phone digits match. Blank returns everyone."""
        clients = await self._store.list_clients()
        needle = query.strip().lower()
        if not needle:
            return clients
        phone_needle = normalize_phone(needle).lstrip("+")
        return [
            c for c in clients
            if needle in c.name.lower()
            or (phone_needle and phone_needle in normalize_phone(c.phone))
        ]

    async def lookup_by_phone(self, phone: str) -> Optional[Client]:
        """Find a client by phone number. Returns None if not found."""
        cleaned = normalize_phone(phone)
        for client in await self._store.list_clients():
            if normalize_phone(client.phone) == cleaned:
                logger.debug("Returning client found: %s", client.name)
                return client
        return None

    async def create_client(
        self, name: str, phone: str, email: Optional[str] = None
    ) -> Client:
        """Create a new client record.

        Raises:
            ValueError: Invalid details, or the phone number is already registered.
        """
        client = Client(name=name, phone=phone, email=email)
        if await self.lookup_by_phone(client.phone) is not None:
            raise ValueError(f"A client with phone {client.phone} already exists.")
        client_id = await self._store.insert_client(client)
        logger.info("New client created: %s (%s)", client.name, client_id)
        return client.model_copy(update={"id": client_id})

    async def seed_default_clients(self) -> int:
        """Insert the built-in client list when the store has no clients yet."""
        if await self._store.list_clients():
            return 0
        seeded = default_clients()
        for client in seeded:
            await self._store.insert_client(client)
        logger.info("Default clients initialized (%d)", len(seeded))
        return len(seeded)
