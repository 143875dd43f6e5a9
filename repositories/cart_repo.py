"""
repositories/cart_repo.py
-------------------------
Data access layer for carts and the burgers they own.
Loads whole Cart aggregates from the `cart` and `burger` tables and
reconciles an in-memory Cart back into them.
"""

from typing import Optional

import psycopg2
from psycopg2 import extras

from db import queries
from db.connection import ConnectionPool
from models.burger import Burger
from models.cart import Cart
from repositories.row_codec import decode_burger, decode_cart, encode_burger, has_burger
from utils.logger import get_logger

logger = get_logger(__name__)


class CartRepository:
    """Repository for Cart aggregates."""

    def __init__(self, connection_pool: ConnectionPool):
        self.pool = connection_pool

    # ── RECONCILE ─────────────────────────────────────────

    def update(self, cart: Cart) -> bool:
        """
        Make the store match the given in-memory cart.

        A checked-out cart only has its row marked inactive. Otherwise a
        new cart row is inserted if needed, every pending burger is
        inserted, and stored burgers that are no longer attached are
        deleted. All statements run in one transaction: on any failure
        the transaction is rolled back and ids handed out during this
        call are cleared from the entities again.

        Args:
            cart: The cart to reconcile. Missing ids are populated on success.

        Returns:
            True if every step succeeded, False otherwise.

        Raises:
            StoreUnavailableError: If no connection could be obtained.
        """
        conn = self.pool.get_connection()
        assigned: list = []
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                if cart.checked_out:
                    reconciled = self._checkout(cur, cart)
                else:
                    reconciled = self._reconcile(cur, cart, assigned)
            if not reconciled:
                conn.rollback()
                self._forget_ids(assigned)
                return False
            conn.commit()
            if assigned:
                logger.info(f"Reconciled cart #{cart.id}, {len(assigned)} new row(s)")
            return True
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to reconcile cart #{cart.id}: {e}")
            self._forget_ids(assigned)
            return False
        except Exception as e:
            conn.rollback()
            logger.error(f"Unexpected error while reconciling cart #{cart.id}: {e}")
            self._forget_ids(assigned)
            raise
        finally:
            self.pool.release_connection(conn)

    def _reconcile(self, cur, cart: Cart, assigned: list) -> bool:
        # Inserts run before the retention pass so new ids are never deleted.
        if cart.id is None:
            if not self._insert_cart(cur, cart):
                return False
            assigned.append(cart)

        for burger in cart.pending_burgers():
            if not self._insert_burger(cur, burger, cart.id):
                return False
            assigned.append(burger)

        self._retain_burgers(cur, cart)
        return True

    @staticmethod
    def _checkout(cur, cart: Cart) -> bool:
        if cart.id is None:
            logger.warning("Cannot check out a cart that was never persisted")
            return False
        cur.execute(queries.CHECKOUT_CART, (cart.id,))
        logger.info(f"Checked out cart #{cart.id}")
        return True

    @staticmethod
    def _insert_cart(cur, cart: Cart) -> bool:
        cur.execute(queries.INSERT_CART)
        row = cur.fetchone()
        if row is None:
            logger.warning("No id returned for new cart")
            return False
        cart.id = row["id"]
        return True

    @staticmethod
    def _insert_burger(cur, burger: Burger, cart_id: int) -> bool:
        cur.execute(queries.INSERT_BURGER, encode_burger(burger, cart_id))
        row = cur.fetchone()
        if row is None:
            logger.warning(f"No id returned for new burger in cart #{cart_id}")
            return False
        burger.id = row["id"]
        return True

    @staticmethod
    def _retain_burgers(cur, cart: Cart) -> None:
        burger_ids = cart.burger_ids()
        # ANY() over an empty array is avoided; an empty cart drops every row.
        if not burger_ids:
            cur.execute(queries.DELETE_BURGERS_OF_CART, (cart.id,))
        else:
            cur.execute(queries.RETAIN_BURGERS, (cart.id, burger_ids))
        if cur.rowcount > 0:
            logger.info(f"Removed {cur.rowcount} detached burger(s) from cart #{cart.id}")

    @staticmethod
    def _forget_ids(entities: list) -> None:
        for entity in entities:
            entity.id = None

    # ── CREATE ────────────────────────────────────────────

    def create_empty_cart(self) -> Optional[Cart]:
        """
        Insert a new, active cart without burgers.

        Returns:
            The new Cart, or None if the store returned no row.
        """
        conn = self.pool.get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(queries.INSERT_CART)
                row = cur.fetchone()
            if row is None:
                conn.rollback()
                logger.warning("No id returned for new cart")
                return None
            conn.commit()
            cart = decode_cart(row)
            logger.info(f"Created cart #{cart.id}")
            return cart
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to create cart: {e}")
            raise
        finally:
            self.pool.release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def get_cart_by_id(self, cart_id: int) -> Optional[Cart]:
        """
        Fetch a cart and its burgers.

        Returns:
            A Cart object or None if not found.
        """
        conn = self.pool.get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(queries.SELECT_CART_BY_ID, (cart_id,))
                row = cur.fetchone()
                if row is None:
                    return None
                cart = decode_cart(row)
                cur.execute(queries.SELECT_BURGERS_OF_CART, (cart_id,))
                for burger_row in cur.fetchall():
                    cart.add_burger(decode_burger(burger_row))
                return cart
        finally:
            self.pool.release_connection(conn)

    def get_active_cart(self) -> Cart:
        """
        Fetch the cart that has not been checked out yet.

        Returns:
            The active Cart with its burgers, or an empty Cart without an
            id if there is none.
        """
        conn = self.pool.get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(queries.SELECT_ACTIVE_CART)
                rows = cur.fetchall()
        finally:
            self.pool.release_connection(conn)

        if not rows:
            return Cart()

        cart = decode_cart(rows[0])
        others = set()
        for row in rows:
            if row["cart_id"] != cart.id:
                others.add(row["cart_id"])
                continue
            if has_burger(row):
                cart.add_burger(decode_burger(row))
        if others:
            logger.warning(f"Found more than one active cart, using #{cart.id} and ignoring {sorted(others)}")
        return cart

    def get_all_carts(self) -> list[Cart]:
        """
        Fetch every cart with its burgers.

        Returns:
            List of Cart objects ordered by id, including carts without burgers.
        """
        conn = self.pool.get_connection()
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(queries.SELECT_ALL_CARTS)
                rows = cur.fetchall()
        finally:
            self.pool.release_connection(conn)

        carts: dict[int, Cart] = {}
        for row in rows:
            cart = carts.get(row["cart_id"])
            if cart is None:
                cart = carts[row["cart_id"]] = decode_cart(row)
            if has_burger(row):
                cart.add_burger(decode_burger(row))
        return list(carts.values())

    # ── UPDATE ────────────────────────────────────────────

    def checkout_cart(self, cart: Cart) -> bool:
        """
        Mark a persisted cart as checked out.

        Returns:
            True if the cart row was updated, False otherwise.
        """
        conn = self.pool.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(queries.CHECKOUT_CART, (cart.id,))
                updated = cur.rowcount > 0
            conn.commit()
            if updated:
                cart.checkout()
                logger.info(f"Checked out cart #{cart.id}")
            return updated
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to check out cart #{cart.id}: {e}")
            raise
        finally:
            self.pool.release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete_cart(self, cart_id: int) -> bool:
        """
        Delete a cart. Its burgers are removed by the foreign key cascade.

        Returns:
            True if a row was deleted, False otherwise.
        """
        conn = self.pool.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(queries.DELETE_CART, (cart_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted cart #{cart_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete cart #{cart_id}: {e}")
            raise
        finally:
            self.pool.release_connection(conn)

    def delete_all_burgers_of_cart(self, cart: Cart) -> bool:
        """Delete every burger stored for a cart."""
        conn = self.pool.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(queries.DELETE_BURGERS_OF_CART, (cart.id,))
                deleted = cur.rowcount
            conn.commit()
            logger.info(f"Deleted {deleted} burger(s) from cart #{cart.id}")
            return True
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete burgers of cart #{cart.id}: {e}")
            raise
        finally:
            self.pool.release_connection(conn)
