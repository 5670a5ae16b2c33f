"""Player registration and resource endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from sect_economy.api.dependencies import (
    get_player_service,
    player_not_found,
    state_conflict,
)
from sect_economy.api.schemas import PlayerInfo, RegisterRequest, build_player_info
from sect_economy.core.logging import get_logger
from sect_economy.core.state import PlayerNotFound, StaleStateError
from sect_economy.services.player_service import PlayerService

logger = get_logger(__name__)

router = APIRouter(prefix="/players", tags=["players"])


@router.post("/register", response_model=PlayerInfo)
async def register_player(
    request: RegisterRequest,
    service: PlayerService = Depends(get_player_service),
) -> PlayerInfo:
    """플레이어 등록. 이미 있는 id 면 저장된 플레이어 반환."""
    try:
        state = service.get(request.player_id)
        logger.info("Existing player returned: %s", request.player_id)
    except PlayerNotFound:
        try:
            state = service.register(
                request.player_id, character_created=request.character_created
            )
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))
    return build_player_info(state)


@router.get("/{player_id}", response_model=PlayerInfo)
async def get_player(
    player_id: str,
    service: PlayerService = Depends(get_player_service),
) -> PlayerInfo:
    try:
        return build_player_info(service.get(player_id))
    except PlayerNotFound:
        raise player_not_found(player_id)


@router.post("/{player_id}/character", response_model=PlayerInfo)
async def create_character(
    player_id: str,
    service: PlayerService = Depends(get_player_service),
) -> PlayerInfo:
    """캐릭터 생성 완료 처리 (문파 페이지 진입 조건)"""
    try:
        return build_player_info(service.create_character(player_id))
    except PlayerNotFound:
        raise player_not_found(player_id)
    except StaleStateError as e:
        raise state_conflict(e)
