"""
main.py
-------
Entry point and composition root for the burger cart store.

Responsibilities:
    - Build the connection pool from configuration.
    - Wire the repositories into the CartService used by the API layer.
    - When run directly, initialize the schema and log a summary of all carts.
"""

from config import DatabaseConfig, load_database_config
from db.connection import ConnectionPool
from db.init_db import create_tables
from repositories.burger_repo import BurgerRepository
from repositories.cart_repo import CartRepository
from services.cart_service import CartService
from utils.logger import get_logger

logger = get_logger(__name__)


def build_services(config: DatabaseConfig) -> tuple[ConnectionPool, CartService]:
    """
    Wire the persistence layer together. The pool is returned unopened.

    Returns:
        The connection pool and the CartService built on top of it.
    """
    connection_pool = ConnectionPool(config)
    service = CartService(CartRepository(connection_pool), BurgerRepository(connection_pool))
    return connection_pool, service


def main() -> None:
    connection_pool, service = build_services(load_database_config())
    with connection_pool:
        create_tables(connection_pool)
        carts = service.list_carts()
        logger.info(f"{len(carts)} cart(s) in store")
        for cart in carts:
            logger.info(str(cart))
            for burger in cart.burgers:
                logger.info(f"  {burger}")


if __name__ == "__main__":
    main()
