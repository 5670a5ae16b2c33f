"""Sect quest board endpoints.

Handlers are ``async def`` so quest timers are armed on the event loop
thread that the scheduler drives.
"""

from fastapi import APIRouter, Depends, HTTPException

from sect_economy.api.dependencies import (
    character_not_created,
    get_player_service,
    get_quest_sessions,
    player_not_found,
    state_conflict,
)
from sect_economy.api.schemas import (
    QuestActionResponse,
    QuestBoardResponse,
    build_player_info,
    build_quest_info,
)
from sect_economy.core.logging import get_logger
from sect_economy.core.state import (
    CharacterNotCreated,
    PlayerNotFound,
    StaleStateError,
)
from sect_economy.services.player_service import PlayerService
from sect_economy.services.quest_service import (
    QuestNotFound,
    QuestService,
    QuestSessionRegistry,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/quests", tags=["quests"])


def _open_session(registry: QuestSessionRegistry, player_id: str) -> QuestService:
    try:
        return registry.open(player_id)
    except PlayerNotFound:
        raise player_not_found(player_id)
    except CharacterNotCreated as e:
        raise character_not_created(e)


def _build_board(service: QuestService) -> QuestBoardResponse:
    return QuestBoardResponse(
        player_id=service.player_id,
        quests=[build_quest_info(q) for q in service.active_quests()],
        time_remaining=service.time_remaining,
        countdown=service.countdown_display,
    )


def _quest_not_found(quest_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Quest not found: {quest_id}")


@router.get("/{player_id}", response_model=QuestBoardResponse)
async def get_board(
    player_id: str,
    registry: QuestSessionRegistry = Depends(get_quest_sessions),
) -> QuestBoardResponse:
    """퀘스트 보드 열기 (이미 열려 있으면 이어서)"""
    return _build_board(_open_session(registry, player_id))


@router.post("/{player_id}/regenerate", response_model=QuestBoardResponse)
async def regenerate_board(
    player_id: str,
    registry: QuestSessionRegistry = Depends(get_quest_sessions),
) -> QuestBoardResponse:
    service = _open_session(registry, player_id)
    service.regenerate()
    return _build_board(service)


@router.delete("/{player_id}")
async def close_board(
    player_id: str,
    registry: QuestSessionRegistry = Depends(get_quest_sessions),
) -> dict[str, bool]:
    return {"closed": registry.close(player_id)}


@router.post("/{player_id}/{quest_id}/progress", response_model=QuestActionResponse)
async def progress_quest(
    player_id: str,
    quest_id: str,
    registry: QuestSessionRegistry = Depends(get_quest_sessions),
) -> QuestActionResponse:
    service = _open_session(registry, player_id)
    try:
        quest = service.progress(quest_id)
    except QuestNotFound:
        raise _quest_not_found(quest_id)

    return QuestActionResponse(
        changed=quest is not None,
        quest=build_quest_info(quest) if quest is not None else None,
        board=_build_board(service),
    )


@router.post("/{player_id}/{quest_id}/claim", response_model=QuestActionResponse)
async def claim_quest(
    player_id: str,
    quest_id: str,
    registry: QuestSessionRegistry = Depends(get_quest_sessions),
    players: PlayerService = Depends(get_player_service),
) -> QuestActionResponse:
    service = _open_session(registry, player_id)
    try:
        quest = service.claim(quest_id)
    except QuestNotFound:
        raise _quest_not_found(quest_id)
    except StaleStateError as e:
        raise state_conflict(e)

    return QuestActionResponse(
        changed=quest is not None,
        quest=build_quest_info(quest) if quest is not None else None,
        board=_build_board(service),
        player=build_player_info(players.get(player_id)),
    )
