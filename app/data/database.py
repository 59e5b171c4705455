# app/data/database.py
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.utils.settings import DATABASE_URL, DB_STATEMENT_TIMEOUT_MS, DB_POOL_TIMEOUT_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def _engine_kwargs(url: str) -> dict:
    # kazde zapytanie ma ograniczony czas, timeout -> rollback calej transakcji
    if url.startswith("sqlite"):
        kwargs = {
            "connect_args": {
                "check_same_thread": False,
                "timeout": DB_STATEMENT_TIMEOUT_MS / 1000,
            },
        }
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        return kwargs

    return {
        "pool_pre_ping": True,
        "pool_timeout": DB_POOL_TIMEOUT_SECONDS,
        "connect_args": {"options": f"-c statement_timeout={DB_STATEMENT_TIMEOUT_MS}"},
    }


class Database:
    """
    Uchwyt do bazy: engine (pula polaczen) + fabryka sesji.
    Tworzony w punkcie wejscia procesu i przekazywany dalej, bez globalnego singletona.
    """

    def __init__(self, url: str | None = None, echo: bool = False):
        self.url = url or DATABASE_URL
        self.engine: Engine = create_engine(self.url, echo=echo, **_engine_kwargs(self.url))

        if self.url.startswith("sqlite"):
            # sqlite domyslnie ignoruje klucze obce (CASCADE, RESTRICT)
            @event.listens_for(self.engine, "connect")
            def _enable_foreign_keys(dbapi_conn, _record):
                cursor = dbapi_conn.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        # import modeli, zeby zarejestrowaly sie w Base.metadata
        import app.data.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")

    def drop_all(self):
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    def dispose(self):
        logger.info("Disposing database engine")
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()
