import json

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tryout.services.grading import ESSAY_STRATEGIES


# Resolve project root (…/tryout/core/config.py -> …/) regardless of current working directory
BASE_DIR = Path(__file__).resolve().parents[2]
ENV_FILE = BASE_DIR / ".env"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Tryout Backend"
    ENV: str = "dev"
    # Init kwargs may also be comma separated
    # From the environment use a JSON list: ["http://localhost:3000","https://example.com"]
    BACKEND_CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # docker-compose sets this to postgresql+psycopg://postgres:password@db:5432/mydatabase
    DATABASE_URL: str = "sqlite:///./tryout.db"
    DB_ECHO: bool = False
    # Create missing tables on startup (dev/sqlite). Production runs `alembic upgrade head`.
    DB_AUTO_CREATE: bool = False

    LOG_LEVEL: str = "INFO"

    # ===== Quiz sessions =====
    # Used when neither the request nor the subtest carries a duration.
    DEFAULT_SESSION_DURATION_MINUTES: int = 10000

    # False: one session per (user, subtest); creating again resumes the existing one.
    # True: every create is a new attempt and reads use the latest attempt.
    ALLOW_MULTIPLE_ATTEMPTS: bool = False

    # Deadlines are advisory by default. When enabled, saving an answer into a
    # session whose end_time has passed is rejected with 409.
    REJECT_LATE_ANSWERS: bool = False

    # Essay grading: exact | case_insensitive | pattern
    ESSAY_GRADING_STRATEGY: str = "case_insensitive"

    # Demo users (teacher id=1, students id=2..) created on startup
    DEMO_SEED_ENABLED: bool = True

    @field_validator("ESSAY_GRADING_STRATEGY")
    @classmethod
    def _check_grading_strategy(cls, v: str) -> str:
        name = (v or "").strip().lower()
        if name not in ESSAY_STRATEGIES:
            raise ValueError(f"Unknown essay grading strategy: {v!r}")
        return name

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        if v is None or v == "":
            return []

        if isinstance(v, list):
            return v

        # JSON list first, then comma separated
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                try:
                    return json.loads(s)
                except ValueError:
                    pass
            return [item.strip() for item in s.split(",") if item.strip()]

        return v


settings = Settings()
