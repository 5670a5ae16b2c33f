"""알림 싱크: 플레이어에게 보이는 메시지를 EventBus 로 발행 (fire-and-forget)"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import asdict, dataclass
from enum import Enum

from sect_economy.core.event_bus import EventBus, GameEvent
from sect_economy.core.event_types import EventTypes

logger = logging.getLogger(__name__)

DEFAULT_LOG_SIZE = 100


class Severity(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    severity: Severity = Severity.DEFAULT
    player_id: str | None = None


class Notifier:
    """알림을 EventTypes.NOTIFICATION 이벤트로 발행. 반환값/재시도 없음."""

    def __init__(self, event_bus: EventBus, source: str) -> None:
        self._bus = event_bus
        self._source = source

    def notify(
        self,
        title: str,
        description: str,
        severity: Severity = Severity.DEFAULT,
        player_id: str | None = None,
    ) -> None:
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.NOTIFICATION,
                data={
                    "title": title,
                    "description": description,
                    "severity": severity.value,
                    "player_id": player_id,
                },
                source=self._source,
            )
        )


class NotificationLog:
    """크기 제한 메모리 구독자. GET /notifications 가 비운다.

    이벤트 루프 스레드 전용 (EventBus 와 같은 제약).
    """

    def __init__(self, event_bus: EventBus, maxlen: int = DEFAULT_LOG_SIZE) -> None:
        self._entries: deque[Notification] = deque(maxlen=maxlen)
        event_bus.subscribe(EventTypes.NOTIFICATION, self._on_notification)

    def _on_notification(self, event: GameEvent) -> None:
        data = event.data
        notification = Notification(
            title=data.get("title", ""),
            description=data.get("description", ""),
            severity=Severity(data.get("severity", Severity.DEFAULT.value)),
            player_id=data.get("player_id"),
        )
        self._entries.append(notification)
        logger.debug("Notification recorded: %s", notification.title)

    def peek(self) -> list[Notification]:
        return list(self._entries)

    def drain(self, player_id: str | None = None) -> list[Notification]:
        """알림 꺼내기 (전체 또는 해당 플레이어 것만), 오래된 순"""
        if player_id is None:
            drained = list(self._entries)
            self._entries.clear()
            return drained

        drained = [n for n in self._entries if n.player_id == player_id]
        kept = [n for n in self._entries if n.player_id != player_id]
        self._entries.clear()
        self._entries.extend(kept)
        return drained

    def __len__(self) -> int:
        return len(self._entries)


def notification_to_dict(notification: Notification) -> dict:
    data = asdict(notification)
    data["severity"] = notification.severity.value
    return data
