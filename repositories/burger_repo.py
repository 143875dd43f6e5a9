"""
repositories/burger_repo.py
---------------------------
Data access layer for burgers, scoped to the cart that owns them.
Used by call paths that do not need a full cart reconciliation.
"""

from psycopg2 import extras

from db import queries
from db.connection import ConnectionPool
from models.burger import Burger
from models.cart import Cart
from repositories.row_codec import decode_burger, encode_burger
from utils.logger import get_logger

logger = get_logger(__name__)


def _require_cart_id(cart: Cart) -> int:
    if cart.id is None:
        raise ValueError("Cart has not been persisted yet")
    return cart.id


class BurgerRepository:
    """Repository for operations on the burger table."""

    def __init__(self, connection_pool: ConnectionPool):
        self.pool = connection_pool

    # ── READ ──────────────────────────────────────────────

    def get_burgers_of_cart(self, cart: Cart) -> list[Burger]:
        """
        Fetch every burger owned by a cart.

        Args:
            cart: A persisted cart.

        Returns:
            List of Burger objects (empty if the cart has none).
        """
        cart_id = _require_cart_id(cart)
        conn = self.pool.get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(queries.SELECT_BURGERS_OF_CART, (cart_id,))
                return [decode_burger(r) for r in cur.fetchall()]
        finally:
            self.pool.release_connection(conn)

    # ── CREATE ────────────────────────────────────────────

    def persist_burger(self, burger: Burger, cart: Cart) -> bool:
        """
        Insert a burger bound to the given cart.

        Args:
            burger: The Burger to persist. Its `id` is populated on success.
            cart: The persisted cart owning the burger.

        Returns:
            True if the store returned a generated id, False otherwise.
        """
        cart_id = _require_cart_id(cart)
        conn = self.pool.get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(queries.INSERT_BURGER, encode_burger(burger, cart_id))
                row = cur.fetchone()
            if row is None:
                conn.rollback()
                logger.warning(f"No id returned for new burger in cart #{cart_id}")
                return False
            conn.commit()
            burger.id = row["id"]
            logger.info(f"Added burger #{burger.id} to cart #{cart_id}")
            return True
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add burger to cart #{cart_id}: {e}")
            raise
        finally:
            self.pool.release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete_burgers_by_id(self, cart: Cart, burger_ids: list[int]) -> bool:
        """
        Delete the given burgers, scoped to a cart.

        Callers are expected to pass a non-empty list of ids.

        Returns:
            True if at least one row was deleted, False otherwise.
        """
        cart_id = _require_cart_id(cart)
        conn = self.pool.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(queries.DELETE_BURGERS_BY_ID, (cart_id, list(burger_ids)))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted burgers {list(burger_ids)} from cart #{cart_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete burgers from cart #{cart_id}: {e}")
            raise
        finally:
            self.pool.release_connection(conn)
