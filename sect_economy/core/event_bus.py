"""EventBus: 상점/퀘스트/플레이어 서비스 사이의 이벤트 전달

규칙:
- 서비스끼리는 직접 import 하지 않고 버스로만 통신한다
- payload 는 player_id, quest_id, item_id 와 숫자 값만 담는다 (PlayerState 등 객체 금지)
- 전파 깊이 최대 MAX_DEPTH
- 한 체인 안에서 같은 source:event_type 은 한 번만
- 스레드 안전하지 않음: emit 은 이벤트 루프 스레드에서만 호출한다
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Any, Set
from collections import defaultdict

from sect_economy.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5  # 체인 하나의 최대 전파 깊이


@dataclass
class GameEvent:
    """이벤트 데이터

    Args:
        event_type: EventTypes 상수 (예: EventTypes.QUEST_CLAIMED)
        data: player_id 등 식별자와 보상/가격 수치
        source: 발행 서비스 이름 ("shop_service", "quest_service" ...)
    """

    event_type: str
    data: Dict[str, Any]
    source: str

    # emit 이 채움
    _depth: int = field(default=0, repr=False)


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """동기식 이벤트 버스

    NotificationLog 가 Notifier 의 알림을 받는 구조가 대표적인 사용 예:
        log = NotificationLog(bus)          # EventTypes.NOTIFICATION 구독
        Notifier(bus, "shop_service").notify("Item Purchased", "...")

    최상위 emit 이 반환되면 체인이 끝나고 중복 기록이 비워진다. 따라서
    같은 서비스가 요청마다 같은 이벤트를 다시 발행할 수 있다.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._current_depth: int = 0
        self._emitted_in_chain: Set[str] = set()  # "source:event_type"

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """핸들러 등록"""
        self._handlers[event_type].append(handler)
        logger.debug(f"EventBus subscribe: {event_type} -> {handler.__qualname__}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """핸들러 해제 (미등록이면 경고만)"""
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                logger.debug(
                    f"EventBus unsubscribe: {event_type} -> {handler.__qualname__}"
                )
            except ValueError:
                logger.warning(
                    f"Handler not registered: {event_type} -> {handler.__qualname__}"
                )

    def emit(self, event: GameEvent) -> None:
        """구독 핸들러를 순서대로 동기 호출

        무시하는 경우:
        1. 깊이가 MAX_DEPTH 에 도달
        2. 같은 체인에서 이미 발행된 source:event_type
        핸들러 예외는 로그만 남기고 다음 핸들러로 진행한다.
        """
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus depth exceeded ({MAX_DEPTH}): "
                f"{event.source}:{event.event_type} dropped"
            )
            return

        chain_key = f"{event.source}:{event.event_type}"
        if chain_key in self._emitted_in_chain:
            logger.warning(f"EventBus duplicate event blocked: {chain_key}")
            return

        self._emitted_in_chain.add(chain_key)
        event._depth = self._current_depth

        handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            logger.debug(f"EventBus: no subscribers for {event.event_type}")
            self._end_chain_if_root()
            return

        logger.debug(
            f"EventBus dispatch: {event.event_type} (source={event.source}, "
            f"depth={self._current_depth}, handlers={len(handlers)})"
        )

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus handler error: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._current_depth -= 1
            self._end_chain_if_root()

    def _end_chain_if_root(self) -> None:
        if self._current_depth == 0:
            self._emitted_in_chain.clear()

    def reset_chain(self) -> None:
        """체인 상태 강제 초기화"""
        self._emitted_in_chain.clear()
        self._current_depth = 0

    def clear(self) -> None:
        """구독 전체 해제 (테스트용)"""
        self._handlers.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        """등록된 핸들러 수"""
        return sum(len(h) for h in self._handlers.values())
