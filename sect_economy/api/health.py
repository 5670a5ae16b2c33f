"""Health check endpoint for the app and the player document database."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sect_economy.core.logging import get_logger
from sect_economy.db.database import get_db

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)) -> dict[str, str]:
    # DB 세션만 쓰므로 threadpool 실행이어도 EventBus 와 무관
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check: database unreachable")
        return {"status": "error", "database": "disconnected"}
    return {"status": "ok", "database": "connected"}
