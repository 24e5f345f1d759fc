# puzzle_backend/config.py

import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.engine import URL


DEFAULT_PORT = 3000


class Settings(BaseModel):
    """
    Runtime configuration read once at process start.
    Passed explicitly to the store and the token service.
    """
    model_config = ConfigDict(frozen=True)

    db_user: Optional[str] = None
    db_host: Optional[str] = None
    db_database: Optional[str] = None
    db_password: Optional[str] = None
    db_port: Optional[int] = None
    database_url_override: Optional[str] = None

    # Empty when JWT_SECRET is unset; tokens are still signed.
    jwt_secret: str = ""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    def database_url(self):
        if self.database_url_override:
            return self.database_url_override
        return URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
        )


def _split_origins(raw: Optional[str]) -> list[str]:
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_settings() -> Settings:
    load_dotenv()

    db_port = os.getenv("DB_PORT")
    return Settings(
        db_user=os.getenv("DB_USER"),
        db_host=os.getenv("DB_HOST"),
        db_database=os.getenv("DB_DATABASE"),
        db_password=os.getenv("DB_PASSWORD"),
        db_port=int(db_port) if db_port else None,
        database_url_override=os.getenv("DATABASE_URL") or None,
        jwt_secret=os.getenv("JWT_SECRET") or "",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT") or DEFAULT_PORT),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS")),
    )
