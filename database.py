"""Database configuration and session management for the MapEstate API."""
import logging
import threading

from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config import settings, ConfigurationError

logger = logging.getLogger(__name__)

Base = declarative_base()


class LazyDatabase:
    """Connects to the store on first use, exactly once per process.

    Concurrent first callers block on the lock; whoever gets it first builds
    the engine and creates the tables, the rest find the session factory
    already set. A failed attempt leaves nothing behind so the next caller
    retries.
    """

    def __init__(self, url=None):
        self._url = url
        self._lock = threading.Lock()
        self.engine = None
        self._session_factory = None

    @property
    def initialized(self):
        return self._session_factory is not None

    def initialize(self):
        if self._session_factory is not None:
            return self._session_factory

        with self._lock:
            if self._session_factory is None:
                url = self._url or settings.DATABASE_URL
                if not url:
                    raise ConfigurationError("DATABASE_URL must be set")

                logger.info("Connecting to database...")
                connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
                engine = create_engine(
                    url, connect_args=connect_args, pool_pre_ping=True, echo=settings.SQL_ECHO
                )

                import models  # noqa: F401  registers the tables on Base.metadata
                Base.metadata.create_all(bind=engine)

                self.engine = engine
                self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
                logger.info("Database connection established")

        return self._session_factory

    def session(self):
        return self.initialize()()

    def reset(self):
        with self._lock:
            if self.engine is not None:
                self.engine.dispose()
            self.engine = None
            self._session_factory = None


lazy_db = LazyDatabase()


def get_db():
    """Dependency for providing a database session to routes."""
    try:
        db = lazy_db.session()
    except Exception:
        logger.exception("Database initialization failed")
        raise HTTPException(status_code=500, detail="Database initialization failed")

    try:
        yield db
    finally:
        db.close()
