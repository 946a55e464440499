import logging
from threading import Lock

from fastapi import Request
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()

logger = logging.getLogger(__name__)

USERNAME_INDEX_NAME = "ix_users_username"


class DatabaseInitError(RuntimeError):
    """Raised when the store cannot be opened or is used before it is ready."""


class Database:
    """Owns the engine and session factory shared by every request handler."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self.engine: Engine | None = None
        self.SessionLocal: sessionmaker | None = None
        self._lock = Lock()

    @property
    def display_url(self) -> str:
        try:
            return make_url(self.url).render_as_string(hide_password=True)
        except ArgumentError:
            return "<unparseable database url>"

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def connect(self) -> None:
        if self.engine is not None:
            return

        with self._lock:
            if self.engine is not None:
                return

            # Imported here so the users table is registered on Base before create_all.
            from user_service.models import user  # noqa: F401

            connect_args = {}
            if self.url.startswith("sqlite"):
                connect_args["check_same_thread"] = False

            try:
                engine = create_engine(self.url, echo=self.echo, connect_args=connect_args)
                with engine.connect() as connection:
                    connection.execute(text("SELECT 1"))
                Base.metadata.create_all(bind=engine)
                ensure_user_schema(engine)
            except SQLAlchemyError as exc:
                logger.exception("Failed to initialize database at %s", self.display_url)
                raise DatabaseInitError("Database initialization failed.") from exc

            self.engine = engine
            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=engine,
            )
            logger.info("Database connected successfully")

    def session(self) -> Session:
        if self.SessionLocal is None:
            raise DatabaseInitError("Database is not connected.")
        return self.SessionLocal()

    def close(self) -> None:
        with self._lock:
            if self.engine is None:
                return
            self.engine.dispose()
            self.engine = None
            self.SessionLocal = None
            logger.info("Database connection closed")


def ensure_user_schema(engine: Engine) -> None:
    """Add the unique username index to a users table created by an older release.

    ``create_all`` leaves existing tables untouched. When the table already holds
    duplicate usernames the index cannot be built; lookups then resolve to the
    lowest id.
    """
    inspector = inspect(engine)
    existing_indexes = {index["name"] for index in inspector.get_indexes("users")}
    if USERNAME_INDEX_NAME in existing_indexes:
        return

    try:
        with engine.begin() as connection:
            connection.execute(
                text(f"CREATE UNIQUE INDEX IF NOT EXISTS {USERNAME_INDEX_NAME} ON users(username)")
            )
    except IntegrityError:
        logger.warning("users table holds duplicate usernames; username uniqueness is not enforced")


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
