"""타이머 스케줄러: 퀘스트 갱신 타이머와 카운트다운용

QuestService 는 ``Scheduler`` 인터페이스(now / call_later / cancel)만 안다.
앱은 ``AsyncioScheduler``, 테스트는 ``VirtualScheduler.advance()`` 로 시간을 돌린다.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], None]


@dataclass
class TimerHandle:
    """call_later 반환값. 호출자는 cancel 에 넘기기만 한다."""

    handle_id: int
    deadline: float
    callback: TimerCallback = field(repr=False)
    cancelled: bool = False
    fired: bool = False
    _native: Any = field(default=None, repr=False)

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


class Scheduler(ABC):
    """시계 + 1회성 타이머"""

    def __init__(self) -> None:
        self._ids = itertools.count(1)

    @abstractmethod
    def now(self) -> float:
        """현재 시각 (초)"""
        ...

    @abstractmethod
    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle:
        """``delay`` 초 뒤 ``callback`` 1회 실행"""
        ...

    def cancel(self, handle: TimerHandle | None) -> None:
        """대기 중 타이머 취소. None/이미 실행/이미 취소된 핸들은 무시."""
        if handle is None or not handle.pending:
            return
        handle.cancelled = True
        self._cancel_native(handle)

    def _cancel_native(self, handle: TimerHandle) -> None:
        pass

    def _run(self, handle: TimerHandle) -> None:
        if not handle.pending:
            return
        handle.fired = True
        try:
            handle.callback()
        except Exception:
            logger.exception("Timer callback failed (handle=%d)", handle.handle_id)


class VirtualScheduler(Scheduler):
    """테스트용 수동 시계. advance() 전에는 아무것도 실행되지 않는다."""

    def __init__(self, start: float = 0.0) -> None:
        super().__init__()
        self._now = float(start)
        self._queue: list[tuple[float, int, TimerHandle]] = []

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle:
        handle = TimerHandle(
            handle_id=next(self._ids),
            deadline=self._now + max(0.0, delay),
            callback=callback,
        )
        heapq.heappush(self._queue, (handle.deadline, handle.handle_id, handle))
        return handle

    def advance(self, seconds: float) -> int:
        """시계를 앞으로 돌리며 만기 타이머를 deadline 순으로 실행.

        콜백 안에서 예약한 타이머도 구간 안이면 함께 실행된다.
        Returns: 실행된 콜백 수
        """
        target = self._now + max(0.0, seconds)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._queue)
            if not handle.pending:
                continue
            self._now = deadline
            self._run(handle)
            fired += 1
        self._now = target
        return fired

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, h in self._queue if h.pending)


class AsyncioScheduler(Scheduler):
    """실시간 시계 + asyncio 이벤트 루프 타이머

    루프 스레드에서만 사용 (service 라우트가 async def 인 이유).
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        super().__init__()
        self._loop = loop or asyncio.get_running_loop()

    def now(self) -> float:
        return time.time()

    def call_later(self, delay: float, callback: TimerCallback) -> TimerHandle:
        handle = TimerHandle(
            handle_id=next(self._ids),
            deadline=self.now() + max(0.0, delay),
            callback=callback,
        )
        handle._native = self._loop.call_later(max(0.0, delay), self._run, handle)
        return handle

    def _cancel_native(self, handle: TimerHandle) -> None:
        if handle._native is not None:
            handle._native.cancel()
