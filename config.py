"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Connection settings for the PostgreSQL store.

    Attributes:
        host: Database host name.
        port: Database port.
        name: Database name.
        user: Login role.
        password: Login password.
        pool_min: Connections the pool keeps open.
        pool_max: Upper bound of pooled connections.
        connect_timeout: Seconds the driver waits for a new connection.
    """
    host: str = "localhost"
    port: int = 5432
    name: str = "burger_cart"
    user: str = "postgres"
    password: str = ""
    pool_min: int = 1
    pool_max: int = 5
    connect_timeout: int = 10

    @property
    def dsn(self) -> str:
        return (
            f"postgresql://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.name}"
        )


def load_database_config() -> DatabaseConfig:
    """Build a DatabaseConfig from the environment (and .env file)."""
    return DatabaseConfig(
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "5432")),
        name=os.getenv("DB_NAME", "burger_cart"),
        user=os.getenv("DB_USER", "postgres"),
        password=os.getenv("DB_PASS", ""),
        pool_min=int(os.getenv("DB_POOL_MIN", "1")),
        pool_max=int(os.getenv("DB_POOL_MAX", "5")),
        connect_timeout=int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
    )


# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
