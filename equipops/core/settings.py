from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    app_name: str = "EquipOps Permissions"
    environment: str = "development"
    debug: bool = False

    log_level: str = "INFO"
    default_locale: str = "en"

    # Role assumed when the session carries an organization without a role.
    default_role: str = "viewer"

    trust_session_headers: bool = False
    session_header_prefix: str = "x-session"

    class Config:
        env_file = Path(__file__).resolve().parents[2] / ".env"
        env_prefix = "EQUIPOPS_"
        case_sensitive = False

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return str(value).upper()

    @field_validator("session_header_prefix", mode="before")
    @classmethod
    def strip_header_prefix(cls, value: str) -> str:
        return str(value).strip().rstrip("-").lower()


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()  # type: ignore[arg-type]


settings = get_settings()
