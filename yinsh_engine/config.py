from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"

    # Yinsh defaults, overridable per match through GameConfig.options
    rings_per_player: int = 5
    rings_to_win: int = 3

    model_config = SettingsConfigDict(
        env_prefix="YINSH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
