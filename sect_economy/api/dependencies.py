"""Service lookups for route handlers (set on app.state by the lifespan)."""

from fastapi import HTTPException, Request

from sect_economy.core.notifications import NotificationLog
from sect_economy.core.state import CharacterNotCreated, StaleStateError
from sect_economy.services.player_service import PlayerService
from sect_economy.services.quest_service import QuestSessionRegistry
from sect_economy.services.shop_service import ShopService


def get_player_service(request: Request) -> PlayerService:
    """PlayerService 인스턴스 반환 (의존성 주입)"""
    service: PlayerService = request.app.state.player_service
    return service


def get_shop_service(request: Request) -> ShopService:
    """ShopService 인스턴스 반환 (의존성 주입)"""
    service: ShopService = request.app.state.shop_service
    return service


def get_quest_sessions(request: Request) -> QuestSessionRegistry:
    """QuestSessionRegistry 인스턴스 반환 (의존성 주입)"""
    registry: QuestSessionRegistry = request.app.state.quest_sessions
    return registry


def get_notification_log(request: Request) -> NotificationLog:
    log: NotificationLog = request.app.state.notification_log
    return log


def player_not_found(player_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Player not found: {player_id}")


def character_not_created(exc: CharacterNotCreated) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={
            "error": "character_not_created",
            "message": "Please create a character first.",
            "redirect": exc.redirect,
        },
    )


def state_conflict(exc: StaleStateError) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={
            "error": "state_conflict",
            "message": str(exc),
            "retry": True,
        },
    )
