# worldbuilder/database.py
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from worldbuilder.errors import ConflictError, NotFoundError, ValidationError, WorldbuilderError

logger = logging.getLogger(__name__)

# SQLAlchemy Base
Base = declarative_base()


def _enable_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.execute("PRAGMA journal_mode = WAL")
    cursor.close()


class Store:
    """
    Owns the engine and session factory for one relational database.

    Lifecycle is ``open() -> session()* -> close()`` and is driven by the
    hosting process (the FastAPI lifespan, or a test fixture).
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.url).get_backend_name() == "sqlite"

    def open(self) -> "Store":
        if self.is_open:
            return self

        connect_args = {}
        if self.is_sqlite:
            database = make_url(self.url).database
            if database and database != ":memory:":
                Path(database).parent.mkdir(parents=True, exist_ok=True)
            connect_args["check_same_thread"] = False

        self.engine = create_engine(self.url, echo=self.echo, connect_args=connect_args)
        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_pragmas)

        # Register every table on Base.metadata before creating them
        import worldbuilder.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info("Store opened at %s", self.engine.url.render_as_string(hide_password=True))
        return self

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Store is not open; call open() first")
        return self._session_factory()

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Store closed")
        self.engine = None
        self._session_factory = None


def translate_integrity_error(exc: IntegrityError) -> WorldbuilderError:
    """Map a store constraint failure onto the matching domain error."""
    message = str(exc.orig) if exc.orig is not None else str(exc)
    if "UNIQUE constraint failed" in message:
        return ConflictError("Resource already exists")
    if "FOREIGN KEY constraint failed" in message:
        return NotFoundError("Referenced record not found")
    if "NOT NULL constraint failed" in message:
        return ValidationError("Required field is missing")
    return ValidationError("Invalid data")


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Scoped all-or-nothing unit of work.

    Commits only if the block finishes; any exception rolls every statement
    in the block back before it propagates.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Constraint failure rolled back: %s", exc.orig)
        raise translate_integrity_error(exc) from exc
    except Exception:
        db.rollback()
        raise


# Dependency to get DB session
def get_db(request: Request):
    db = request.app.state.store.session()
    try:
        yield db
    finally:
        db.close()
