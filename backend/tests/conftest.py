# backend/tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.core.security import create_access_token
from app.db import get_connection, init_db
from app.main import app

AREAS = [
    ("Aurukun Shire Council", -13.354875, 141.729058),
    ("Brisbane City Council", -27.4689682, 153.0234991),
    ("Cairns Regional Council", -16.9206657, 145.7721854),
]

# (area, gender, age, year, month, homicide, assault, arson)
OFFENCES = [
    ("Aurukun Shire Council", "Male", "Adult", 2019, 1, 0, 12, 0),
    ("Aurukun Shire Council", "Female", "Juvenile", 2019, 1, 0, 2, 1),
    ("Brisbane City Council", "Male", "Adult", 2019, 1, 1, 410, 4),
    ("Brisbane City Council", "Female", "Adult", 2020, 2, 0, 150, 2),
    ("Cairns Regional Council", "Male", "Juvenile", 2020, 2, 0, 60, 3),
]


TEST_JWT_SECRET = "test-signing-key-that-is-long-enough-for-hs256"


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setattr(settings, "JWT_SECRET", TEST_JWT_SECRET)
    return TEST_JWT_SECRET


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the app at an empty, initialised SQLite file."""
    path = tmp_path / "test.sqlite"
    monkeypatch.setattr(settings, "DB_PATH", str(path))
    # cheapest cost bcrypt accepts
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    init_db()
    return path


@pytest.fixture
def seeded_db(db_path):
    conn = get_connection()
    try:
        conn.executemany("INSERT INTO areas (area, lat, lng) VALUES (?, ?, ?)", AREAS)
        conn.executemany(
            """
            INSERT INTO offences (area, gender, age, year, month, homicide, assault, arson)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            OFFENCES,
        )
        conn.commit()
    finally:
        conn.close()
    return db_path


@pytest.fixture
def client(seeded_db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    token = create_access_token("tester@example.com")
    return {"Authorization": f"Bearer {token}"}
