import pytest
from sqlalchemy import create_engine, text

from user_service.database import Database


@pytest.fixture
def database(tmp_path):
    db = Database(f'sqlite:///{tmp_path / "test.db"}')
    db.connect()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def session(database):
    db = database.session()
    try:
        yield db
    finally:
        db.close()


LEGACY_USERS_TABLE = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL,
    email TEXT UNIQUE NOT NULL,
    password_hash TEXT NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""


@pytest.fixture
def legacy_database_url(tmp_path):
    """A database file whose users table predates the unique username index."""
    url = f'sqlite:///{tmp_path / "legacy.db"}'
    engine = create_engine(url)
    with engine.begin() as connection:
        connection.execute(text(LEGACY_USERS_TABLE))
    engine.dispose()
    return url
