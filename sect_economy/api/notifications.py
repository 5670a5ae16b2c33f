"""Notification feed endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends

from sect_economy.api.dependencies import get_notification_log
from sect_economy.api.schemas import NotificationInfo, build_notification_info
from sect_economy.core.notifications import NotificationLog

router = APIRouter(tags=["notifications"])


@router.get("/notifications", response_model=list[NotificationInfo])
async def drain_notifications(
    player_id: Optional[str] = None,
    log: NotificationLog = Depends(get_notification_log),
) -> list[NotificationInfo]:
    """대기 중 알림 꺼내기 (오래된 순). player_id 지정 시 해당 플레이어 것만."""
    return [build_notification_info(n) for n in log.drain(player_id)]
