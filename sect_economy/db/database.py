"""Database engine and session factory for the player document store.

SqlPlayerStateStore opens its own sessions from SessionLocal; get_db serves
endpoints that only need a plain session.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from sect_economy.config import settings

_connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(settings.DATABASE_URL, connect_args=_connect_args, echo=settings.DEBUG)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """요청 단위 세션 (FastAPI dependency, 테스트에서 override)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
