"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from config import load_database_config
from db.connection import ConnectionPool
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Cart table: active = TRUE means the cart has not been checked out
CREATE TABLE IF NOT EXISTS cart (
    id              SERIAL PRIMARY KEY,
    active          BOOLEAN NOT NULL DEFAULT TRUE
);

-- Burger table: every burger belongs to exactly one cart
CREATE TABLE IF NOT EXISTS burger (
    id              SERIAL PRIMARY KEY,
    patty_type      VARCHAR(20) NOT NULL,
    cheese          BOOLEAN NOT NULL DEFAULT FALSE,
    salad           BOOLEAN NOT NULL DEFAULT FALSE,
    tomato          BOOLEAN NOT NULL DEFAULT FALSE,
    cart_id         INT NOT NULL REFERENCES cart(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_burger_cart ON burger(cart_id);
CREATE INDEX IF NOT EXISTS idx_cart_active ON cart(id) WHERE active = TRUE;
"""


def create_tables(connection_pool: ConnectionPool) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = connection_pool.get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        connection_pool.release_connection(conn)


if __name__ == "__main__":
    with ConnectionPool(load_database_config()) as connection_pool:
        create_tables(connection_pool)
    print("Database schema created successfully.")
