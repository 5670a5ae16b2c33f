"""Sect economy settings: quest timers, shop stock, store retries, starting balances."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment variables override values read from ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./dev.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 퀘스트 보드 (갱신 타이머, 카운트다운, 보충 임계값)
    QUEST_REFRESH_SECONDS: float = 180.0
    COUNTDOWN_TICK_SECONDS: float = 1.0
    QUEST_REPLENISH_THRESHOLD: int = 5

    # 상점 세션당 재고
    SHOP_WEAPON_STOCK: int = 25
    SHOP_APPAREL_STOCK: int = 50  # 의복 시리즈당

    # 플레이어 문서 저장소 + 신규 등록 시 초기 자원
    STATE_UPDATE_RETRIES: int = 3
    STARTING_GOLD: int = 1000
    STARTING_SPIRITUAL_STONES: int = 10
    STARTING_ENERGY: int = 100


settings = Settings()
