"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of seastyle/)
_env_path = Path(__file__).resolve().parent.parent / ".env"

DEFAULT_ORIGIN = "https://sea-style-m.yamaha-motor.co.jp"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0 Safari/537.36"


class Settings(BaseSettings):
    # Upstream origin; requests go here directly unless seastyle_api_base is set
    seastyle_origin: str = DEFAULT_ORIGIN
    # Optional relay, e.g. https://my-app.vercel.app/api/proxy (path is passed as ?path=)
    seastyle_api_base: str = ""
    seastyle_timeout_seconds: float = 20.0
    seastyle_user_agent: str = DEFAULT_USER_AGENT
    # Comma-separated extra CORS origins for the frontend
    cors_origins: str = ""

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("seastyle_origin", "seastyle_api_base", mode="after")
    @classmethod
    def strip_url(cls, v: str) -> str:
        return (v or "").strip().rstrip("/")

    @field_validator("seastyle_timeout_seconds", mode="after")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        return v if v > 0 else 20.0


settings = Settings()
