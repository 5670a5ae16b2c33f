"""플레이어 Service: 등록 + 조회, 저장소 위에서 동작"""

from dataclasses import replace

from sect_economy.core.event_bus import EventBus, GameEvent
from sect_economy.core.event_types import EventTypes
from sect_economy.core.logging import get_logger
from sect_economy.core.state import PlayerState, PlayerStateStore

logger = get_logger(__name__)


class PlayerService:
    def __init__(
        self,
        store: PlayerStateStore,
        event_bus: EventBus,
        starting_gold: int = 0,
        starting_spiritual_stones: int = 0,
        starting_energy: int = 0,
    ):
        self._store = store
        self._bus = event_bus
        self._starting_gold = starting_gold
        self._starting_stones = starting_spiritual_stones
        self._starting_energy = starting_energy

    def register(
        self, player_id: str, character_created: bool = True
    ) -> PlayerState:
        """초기 자원으로 문서 생성. 이미 있는 id 면 ValueError."""
        state = self._store.create(
            PlayerState(
                player_id=player_id,
                gold=self._starting_gold,
                spiritual_stones=self._starting_stones,
                energy=self._starting_energy,
                character_created=character_created,
            )
        )
        logger.info(
            "Player registered: %s (character_created=%s)",
            player_id,
            character_created,
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.PLAYER_REGISTERED,
                data={"player_id": player_id},
                source="player_service",
            )
        )
        return state

    def get(self, player_id: str) -> PlayerState:
        return self._store.snapshot(player_id)

    def create_character(self, player_id: str) -> PlayerState:
        """캐릭터 생성 완료 표시 (멱등)"""
        return self._store.update(
            player_id, lambda state: replace(state, character_created=True)
        )
