# hap_desk/core/database.py
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class StoreInitializationError(RuntimeError):
    """The database file could not be opened or its schema ensured."""


class Database:
    """One SQLite connection shared behind a lock.

    Every unit of work goes through :meth:`session`, which holds the lock
    until the block exits, so at most one operation touches the connection
    at a time.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.engine = create_engine(
            f"sqlite:///{self.path}",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self._lock = threading.Lock()

    def initialize(self) -> None:
        # Register the table on Base.metadata before create_all
        from hap_desk.ticket import models  # noqa: F401

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self._lock:
                with self.engine.connect() as conn:
                    mode = conn.exec_driver_sql("PRAGMA journal_mode=WAL").scalar()
                Base.metadata.create_all(bind=self.engine, checkfirst=True)
        except (OSError, SQLAlchemyError) as exc:
            raise StoreInitializationError(f"Failed to initialize database at {self.path}: {exc}") from exc
        logger.info("Ticket store ready at %s (journal_mode=%s)", self.path, mode)

    @contextmanager
    def session(self) -> Iterator[Session]:
        with self._lock:
            db = self._session_factory()
            try:
                yield db
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def dispose(self) -> None:
        with self._lock:
            self.engine.dispose()


def open_database(path: Path | str) -> Database:
    database = Database(path)
    database.initialize()
    return database
