from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API client
    api_base_url: str = "http://localhost:8000/api"
    request_timeout_seconds: float | None = None  # None: transport default, no explicit timeout
    session_dir: Path = Path.home() / ".iskio"

    # Booking rules (weekday numbering 0=Sunday..6=Saturday)
    closed_weekdays: list[int] = [0]
    default_hours: list[str] = [
        "10:00",
        "11:00",
        "12:00",
        "13:00",
        "15:00",
        "16:00",
        "17:00",
        "18:00",
        "19:00",
    ]
    editor_default_weekdays: list[int] = [1, 2, 3, 4, 5, 6]
    editor_default_span_days: int = 14

    # Reference API: JWT
    secret_key: str = "dev-secret-change-me"
    access_token_expire_minutes: int = 60 * 12
    algorithm: str = "HS256"
    bcrypt_rounds: int = 12

    # Reference API: CORS
    cors_origins: str = "http://localhost:5173"

    # Reference API: seeded admin account
    admin_username: str = "admin"
    admin_password: str = "admin123"
    admin_email: str = "admin@iskiospa.cl"

    # Env
    env: str = "development"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def session_file(self) -> Path:
        return self.session_dir / "session.json"


settings = Settings()
