"""Test configuration and fixtures"""

from datetime import date, timedelta
from typing import List, Tuple

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from uuid import uuid4

from app.main import app
from app.database import Base, get_db
from app.models.table import Table, TableStatus
from app.models.timeslot import TimeSlot
from app.models.user import User, UserRole
from app.api.auth import create_access_token, get_password_hash
from app.api.dependencies import get_notifier
from app.services.locks import KeyedLocks


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SLOT_DATE = date.today() + timedelta(days=7)


class RecordingNotifier:
    """Notifier double that keeps every published event"""

    def __init__(self):
        self.events: List[Tuple[str, dict]] = []

    async def publish(self, event, payload: dict) -> None:
        name = event.value if hasattr(event, "value") else event
        self.events.append((name, payload))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def locks():
    return KeyedLocks()


async def _create_user(db: AsyncSession, email: str, role: UserRole, full_name: str) -> User:
    user = User(
        id=uuid4(),
        email=email,
        hashed_password=get_password_hash("testpass123"),
        full_name=full_name,
        role=role,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def staff_user(test_db):
    """Create a staff member"""
    return await _create_user(test_db, "staff@example.com", UserRole.STAFF, "Staff User")


@pytest.fixture
async def customer_user(test_db):
    """Create a customer"""
    return await _create_user(test_db, "customer@example.com", UserRole.CUSTOMER, "Jane Diner")


@pytest.fixture
async def other_customer(test_db):
    """Create a second customer"""
    return await _create_user(test_db, "other@example.com", UserRole.CUSTOMER, "Sam Other")


@pytest.fixture
async def test_table(test_db):
    """A four-seat indoor table"""
    table = Table(
        id=uuid4(),
        table_number="T1",
        capacity=4,
        location="indoor",
        area="main",
        features=["window-view"],
        price_per_person=30.0,
        is_active=True,
        current_status=TableStatus.AVAILABLE.value,
    )
    test_db.add(table)
    await test_db.commit()
    return table


@pytest.fixture
async def test_slot(test_db, staff_user):
    """An evening slot with special pricing"""
    time_slot = TimeSlot(
        id=uuid4(),
        date=SLOT_DATE,
        start_time="18:00",
        end_time="20:00",
        duration=120,
        max_party_size=6,
        location="indoor",
        area="main",
        features=["dinner"],
        special_pricing=45.0,
        is_available=True,
        created_by=staff_user.id,
    )
    test_db.add(time_slot)
    await test_db.commit()
    return time_slot


@pytest.fixture
def booking_payload(test_slot, test_table):
    """Build a booking request body for the default slot and table"""
    slot_id, table_id, on_date = str(test_slot.id), str(test_table.id), test_slot.date.isoformat()

    def build(**overrides) -> dict:
        payload = {
            "time_slot_id": slot_id,
            "table_id": table_id,
            "party_size": 2,
            "reservation_date": on_date,
            "start_time": "18:00",
            "end_time": "19:30",
        }
        payload.update(overrides)
        return payload
    return build


@pytest.fixture
async def client(test_db, notifier):
    """Create test client with overridden database and notifier"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def staff_headers(staff_user):
    return auth_headers(staff_user)


@pytest.fixture
def customer_headers(customer_user):
    return auth_headers(customer_user)


@pytest.fixture
def other_headers(other_customer):
    return auth_headers(other_customer)
