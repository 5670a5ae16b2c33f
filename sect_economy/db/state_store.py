"""SQLAlchemy 기반 플레이어 문서 저장소

compare-and-update = ``UPDATE ... WHERE version = :expected``.
rowcount 0 이면 다른 writer 가 먼저 커밋한 것이므로 다시 읽고 재시도.
"""

from datetime import datetime, timezone

from sqlalchemy import update
from sqlalchemy.orm import Session, sessionmaker

from sect_economy.core.logging import get_logger
from sect_economy.core.state import (
    DEFAULT_UPDATE_RETRIES,
    PlayerState,
    PlayerStateStore,
    inventory_from_dict,
    inventory_to_dict,
)
from sect_economy.db.models import PlayerModel

logger = get_logger(__name__)


class SqlPlayerStateStore(PlayerStateStore):
    """연산마다 짧은 세션 하나"""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        max_retries: int = DEFAULT_UPDATE_RETRIES,
    ) -> None:
        super().__init__(max_retries)
        self._session_factory = session_factory

    def _load(self, player_id: str) -> tuple[PlayerState, int] | None:
        with self._session_factory() as db:
            row = db.get(PlayerModel, player_id)
            if row is None:
                return None
            return self._row_to_core(row), row.version

    def _insert(self, state: PlayerState) -> None:
        with self._session_factory() as db:
            db.add(self._core_to_row(state))
            db.commit()

    def _compare_and_set(
        self, player_id: str, expected_version: int, state: PlayerState
    ) -> bool:
        with self._session_factory() as db:
            result = db.execute(
                update(PlayerModel)
                .where(
                    PlayerModel.player_id == player_id,
                    PlayerModel.version == expected_version,
                )
                .values(
                    **self._core_to_values(state),
                    version=expected_version + 1,
                    updated_at=datetime.now(timezone.utc),
                )
            )
            db.commit()
            committed = result.rowcount == 1
        if not committed:
            logger.debug(
                "CAS miss for %s at version %d", player_id, expected_version
            )
        return committed

    # === ORM <-> Core ===

    def _row_to_core(self, row: PlayerModel) -> PlayerState:
        """ORM → Core"""
        return PlayerState(
            player_id=row.player_id,
            gold=row.gold,
            spiritual_stones=row.spiritual_stones,
            energy=row.energy,
            cultivation_level=row.cultivation_level,
            cultivation_progress=row.cultivation_progress,
            character_created=row.character_created,
            inventory=inventory_from_dict(row.inventory),
        )

    def _core_to_values(self, state: PlayerState) -> dict:
        return {
            "gold": state.gold,
            "spiritual_stones": state.spiritual_stones,
            "energy": state.energy,
            "cultivation_level": state.cultivation_level,
            "cultivation_progress": state.cultivation_progress,
            "character_created": state.character_created,
            "inventory": inventory_to_dict(state.inventory),
        }

    def _core_to_row(self, state: PlayerState) -> PlayerModel:
        """Core → ORM"""
        return PlayerModel(
            player_id=state.player_id,
            version=0,
            **self._core_to_values(state),
        )
