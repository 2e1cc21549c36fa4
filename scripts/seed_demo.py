#!/usr/bin/env python3
"""
Seed script to create demo staff, customers, tables and a week of time slots
"""

import asyncio
import uuid
from datetime import date, timedelta

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

USERS = [
    {"email": "admin@restaurant.com", "password": "admin123", "full_name": "Admin User", "role": "staff"},
    {"email": "staff1@restaurant.com", "password": "staff123", "full_name": "Sarah Johnson", "role": "staff"},
    {"email": "john.doe@email.com", "password": "customer123", "full_name": "John Doe", "role": "customer"},
    {"email": "mike.wilson@email.com", "password": "customer123", "full_name": "Mike Wilson", "role": "customer"},
]

TABLES = [
    {"table_number": "1", "capacity": 2, "location": "indoor", "area": "main", "features": ["window-view", "quiet-area"], "price_per_person": 25.0},
    {"table_number": "2", "capacity": 4, "location": "indoor", "area": "main", "features": ["accessible", "high-chair-available"], "price_per_person": 25.0},
    {"table_number": "3", "capacity": 6, "location": "indoor", "area": "main", "features": ["accessible"], "price_per_person": 25.0},
    {"table_number": "4", "capacity": 2, "location": "outdoor", "area": "patio", "features": ["quiet-area"], "price_per_person": 30.0},
    {"table_number": "5", "capacity": 4, "location": "outdoor", "area": "patio", "features": ["high-chair-available"], "price_per_person": 30.0},
    {"table_number": "6", "capacity": 8, "location": "private-dining", "area": "private", "features": ["private", "accessible"], "price_per_person": 35.0},
    {"table_number": "7", "capacity": 2, "location": "bar", "area": "bar", "features": ["accessible"], "price_per_person": 20.0},
    {"table_number": "8", "capacity": 4, "location": "outdoor", "area": "rooftop", "features": ["window-view"], "price_per_person": 40.0},
]

# (start, end, location, area, max_party_size, special_pricing, features)
# Windows at one location never overlap within a day
DAILY_SLOTS = [
    ("11:00", "13:00", "indoor", "main", 8, 25.0, ["lunch", "indoor"]),
    ("13:00", "15:00", "indoor", "main", 8, 25.0, ["lunch", "indoor"]),
    ("17:00", "19:00", "indoor", "main", 8, 35.0, ["dinner", "indoor"]),
    ("19:00", "21:00", "indoor", "main", 8, 35.0, ["dinner", "indoor"]),
    ("21:00", "23:00", "indoor", "main", 8, 35.0, ["dinner", "indoor"]),
]

PATIO_SLOTS = [
    ("18:00", "20:00", "outdoor", "patio", 6, 30.0, ["dinner", "outdoor", "patio"]),
    ("20:00", "22:00", "outdoor", "patio", 6, 30.0, ["dinner", "outdoor", "patio"]),
]


async def seed_demo_data():
    """Seed demo data for development"""
    from app.database import SessionLocal, engine, Base
    from app.models.table import Table, TableStatus
    from app.models.timeslot import TimeSlot
    from app.models.user import User, UserRole
    from app.services.times import to_minutes

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo data already exists
        from sqlalchemy import select
        result = await db.execute(
            select(User).where(User.email == USERS[0]["email"])
        )
        existing = result.scalar_one_or_none()

        if existing:
            print("Demo data already exists. Skipping...")
            return

        print("Creating users...")

        staff_id = None
        for user_data in USERS:
            user = User(
                id=uuid.uuid4(),
                email=user_data["email"],
                hashed_password=pwd_context.hash(user_data["password"]),
                full_name=user_data["full_name"],
                role=UserRole(user_data["role"]),
                is_active=True,
            )
            db.add(user)
            if staff_id is None and user.role == UserRole.STAFF:
                staff_id = user.id

        print("Creating tables...")

        for table_data in TABLES:
            db.add(Table(
                is_active=True,
                current_status=TableStatus.AVAILABLE.value,
                **table_data,
            ))

        print("Creating time slots...")

        slot_count = 0
        today = date.today()
        for day in range(7):
            slot_date = today + timedelta(days=day)
            windows = DAILY_SLOTS + (PATIO_SLOTS if day < 3 else [])

            for start, end, location, area, max_party, pricing, features in windows:
                if location == "outdoor":
                    notes = "Weather permitting - covered patio available"
                elif day == 0 and start < "15:00":
                    notes = "Today's special: 20% off lunch!"
                else:
                    notes = None

                db.add(TimeSlot(
                    date=slot_date,
                    start_time=start,
                    end_time=end,
                    duration=to_minutes(end) - to_minutes(start),
                    max_party_size=max_party,
                    location=location,
                    area=area,
                    features=features,
                    special_pricing=pricing,
                    special_notes=notes,
                    is_available=True,
                    created_by=staff_id,
                ))
                slot_count += 1

        await db.commit()

        print(f"""
Demo data created successfully!

Users:
  Staff:
    Email: {USERS[0]["email"]}
    Password: {USERS[0]["password"]}

  Customer:
    Email: {USERS[2]["email"]}
    Password: {USERS[2]["password"]}

Tables: {len(TABLES)} created
Time slots: {slot_count} created over the next 7 days
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
