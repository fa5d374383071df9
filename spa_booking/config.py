from functools import lru_cache
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


class Settings(BaseModel):
    database_url: str = Field(default="sqlite+aiosqlite:///./spa-booking.db")
    echo_sql: bool = Field(default=False)

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)
    log_level: str = Field(default="INFO")

    admin_key: str | None = Field(default=None)

    # Outbound mail. Sending is disabled unless both credentials are set.
    email_user: str | None = Field(default=None)
    email_pass: str | None = Field(default=None)
    smtp_host: str = Field(default="smtp.gmail.com")
    smtp_port: int = Field(default=587)

    @property
    def email_enabled(self) -> bool:
        return bool(self.email_user and self.email_pass)


def _env_or_none(name: str) -> str | None:
    value = os.getenv(name)
    return value if value else None


@lru_cache
def get_settings() -> Settings:
    defaults = Settings.model_fields
    return Settings(
        database_url=os.getenv("DATABASE_URL", defaults["database_url"].default),
        echo_sql=bool(int(os.getenv("ECHO_SQL", "0"))),
        host=os.getenv("HOST", defaults["host"].default),
        port=int(os.getenv("PORT", str(defaults["port"].default))),
        log_level=os.getenv("LOG_LEVEL", defaults["log_level"].default),
        admin_key=_env_or_none("ADMIN_KEY"),
        email_user=_env_or_none("EMAIL_USER"),
        email_pass=_env_or_none("EMAIL_PASS"),
        smtp_host=os.getenv("SMTP_HOST", defaults["smtp_host"].default),
        smtp_port=int(os.getenv("SMTP_PORT", str(defaults["smtp_port"].default))),
    )
