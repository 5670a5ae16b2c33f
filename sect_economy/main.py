"""FastAPI application entrypoint for the sect economy service."""

import random
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from sect_economy.api.health import router as health_router
from sect_economy.api.notifications import router as notifications_router
from sect_economy.api.players import router as players_router
from sect_economy.api.quests import router as quests_router
from sect_economy.api.shop import router as shop_router
from sect_economy.config import settings
from sect_economy.core.event_bus import EventBus
from sect_economy.core.logging import get_logger, setup_logging
from sect_economy.core.notifications import NotificationLog
from sect_economy.core.scheduler import AsyncioScheduler, Scheduler
from sect_economy.core.state import PlayerStateStore
from sect_economy.db.database import SessionLocal, engine as db_engine
from sect_economy.db.models import Base
from sect_economy.db.state_store import SqlPlayerStateStore
from sect_economy.services.player_service import PlayerService
from sect_economy.services.quest_service import QuestSessionRegistry
from sect_economy.services.shop_service import ShopService

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


def init_services(
    app: FastAPI,
    store: PlayerStateStore,
    scheduler: Scheduler,
    rng: random.Random | None = None,
) -> None:
    """저장소, EventBus, 서비스를 ``app.state`` 에 연결 (테스트는 VirtualScheduler 로 호출)"""
    event_bus = EventBus()
    rng = rng or random.Random()

    app.state.event_bus = event_bus
    app.state.store = store
    app.state.scheduler = scheduler
    app.state.notification_log = NotificationLog(event_bus)

    app.state.player_service = PlayerService(
        store,
        event_bus,
        starting_gold=settings.STARTING_GOLD,
        starting_spiritual_stones=settings.STARTING_SPIRITUAL_STONES,
        starting_energy=settings.STARTING_ENERGY,
    )
    app.state.shop_service = ShopService(
        store,
        event_bus,
        rng=rng,
        weapon_stock=settings.SHOP_WEAPON_STOCK,
        apparel_stock=settings.SHOP_APPAREL_STOCK,
    )
    app.state.quest_sessions = QuestSessionRegistry(
        store,
        event_bus,
        scheduler,
        rng=rng,
        refresh_seconds=settings.QUEST_REFRESH_SECONDS,
        countdown_tick_seconds=settings.COUNTDOWN_TICK_SECONDS,
        replenish_threshold=settings.QUEST_REPLENISH_THRESHOLD,
    )
    logger.info("Services initialized (store=%s)", type(store).__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup builds tables, the SQL store and the loop scheduler.

    Shutdown closes open quest boards.
    """
    # DB 테이블 생성
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    # 서비스 초기화. AsyncioScheduler 는 실행 중인 루프에 묶인다
    store = SqlPlayerStateStore(
        SessionLocal, max_retries=settings.STATE_UPDATE_RETRIES
    )
    init_services(app, store, AsyncioScheduler())

    yield

    logger.info("Shutting down...")
    # 열린 퀘스트 보드의 타이머 정리
    app.state.quest_sessions.close_all()


app = FastAPI(title="Sect Economy", lifespan=lifespan)

app.include_router(health_router)
app.include_router(players_router)
app.include_router(shop_router)
app.include_router(quests_router)
app.include_router(notifications_router)
