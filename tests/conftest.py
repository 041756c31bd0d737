"""
Shared fixtures: a file-backed SQLite database standing in for PostgreSQL,
seeded with fifteen advocates, and an API client bound to it.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from main import create_app
from services.advocate_directory.models import Advocate
from shared.config import Settings
from shared.db import Database

ADVOCATES = [
    ("John", "Doe", "New York", "MD", ["Bipolar", "LGBTQ"], 10, 5551234567),
    ("Jane", "Smith", "Los Angeles", "PhD", ["Trauma & PTSD"], 8, 5559876543),
    ("Alice", "Johnson", "Chicago", "MSW", ["Anxiety"], 5, 5555555555),
    ("Michael", "Brown", "Houston", "MD", ["Eating disorders"], 12, 5551112222),
    ("Emily", "Davis", "Phoenix", "PhD", ["Sleep issues"], 7, 5553334444),
    ("Chris", "Martinez", "Philadelphia", "MSW", ["Chronic pain"], 9, 5556667777),
    ("Jessica", "Taylor", "San Antonio", "MD", ["Weight loss & nutrition"], 11, 5558889999),
    ("David", "Harris", "San Diego", "PhD", ["Suicide History/Attempts"], 6, 5554443333),
    ("Laura", "Clark", "Dallas", "MSW", ["Anxiety", "Depression"], 4, 5557778888),
    ("Daniel", "Lewis", "San Jose", "MD", ["Schizophrenia"], 13, 5550001111),
    ("Sarah", "Lee", "Austin", "PhD", ["Personality disorders"], 10, 5552223333),
    ("James", "King", "Jacksonville", "MSW", ["Coaching"], 5, 5559990000),
    ("Megan", "Littlejohn", "San Francisco", "MD", ["Life coaching"], 9, 5551231234),
    ("Joshua", "Scott", "Columbus", "PhD", ["Pediatrics"], 7, 5554564567),
    ("Amanda", "Green", "Fort Worth", "MSW", ["Women's issues"], 3, 5557897890),
]


def make_advocate(row) -> Advocate:
    first_name, last_name, city, degree, specialties, years, phone = row
    return Advocate(
        first_name=first_name,
        last_name=last_name,
        city=city,
        degree=degree,
        specialties=specialties,
        years_of_experience=years,
        phone_number=phone,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url=None, search_min_length=2, default_page_size=10, max_page_size=100)


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'advocates.db'}"


@pytest.fixture
async def database(sqlite_url):
    db = Database.from_url(sqlite_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def seeded_database(database):
    async with database.session_factory() as session:
        session.add_all([make_advocate(row) for row in ADVOCATES])
        await session.commit()
    return database


@pytest.fixture
async def db_session(seeded_database):
    async with seeded_database.session_factory() as session:
        yield session


@pytest.fixture
async def api_client(settings, seeded_database):
    app = create_app(settings=settings, database=seeded_database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
