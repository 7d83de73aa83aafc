from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="QUIZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    database_url: str = "sqlite+aiosqlite:///./listening_quiz.db"

    # Single storage key holding the whole serialized question collection
    storage_key: str = "fib-questions"

    # Best-effort replace-all mirror; empty string disables it
    remote_mirror_url: str = "http://localhost:4000/api/questions"
    remote_timeout: float = 5.0

    # Shared passphrase for admin mode. Not a security boundary.
    admin_code: str = "asthehourspassiwillletyouknowthatineedtoaskbeforeimalone"

    # Keep raw string to avoid JSON parsing issues for lists
    cors_origins_raw: str = Field(default="*")
    media_root: Path = Path("media")
    log_dir: Path = Path("logs")

    @property
    def cors_origins(self) -> list[str]:
        raw = self.cors_origins_raw
        if not raw:
            return []
        return [part.strip() for part in raw.split(",") if part.strip()]


settings = Settings()
