"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./thesisflow.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Duplicate detection (abstract similarity, percent)
    DUPLICATE_THRESHOLD: float = 60.0
    DUPLICATE_MIN_ABSTRACT_LENGTH: int = 100

    # Team matching
    TEAM_MATCH_DEFAULT_LIMIT: int = 20
    TEAM_MATCH_MAX_LIMIT: int = 100

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
