"""Shared fixtures: an in-memory stand-in for the PostgreSQL store.

FakeStore keeps the `cart` and `burger` tables as dicts and understands
exactly the statements in db/queries.py. FakeConnection gives it
psycopg2-like transaction behaviour (commit / rollback to a snapshot).
"""

import copy

import psycopg2
import pytest

from db import queries
from repositories.burger_repo import BurgerRepository
from repositories.cart_repo import CartRepository
from services.cart_service import CartService


class FakeStore:
    def __init__(self):
        self.carts: dict[int, dict] = {}
        self.burgers: dict[int, dict] = {}
        self._next_cart_id = 1
        self._next_burger_id = 1
        self.statements: list[str] = []
        # Statements listed here execute without returning a generated key.
        self.no_returning: set[str] = set()
        # Statements mapped here return a key this many times, then none.
        self.key_budget: dict[str, int] = {}
        # Statements mapped here raise the given error.
        self.errors: dict[str, Exception] = {}
        self._handlers = {
            queries.INSERT_CART: self._insert_cart,
            queries.SELECT_CART_BY_ID: self._select_cart_by_id,
            queries.CHECKOUT_CART: self._checkout_cart,
            queries.DELETE_CART: self._delete_cart,
            queries.SELECT_ACTIVE_CART: self._select_active_cart,
            queries.SELECT_ALL_CARTS: self._select_all_carts,
            queries.INSERT_BURGER: self._insert_burger,
            queries.SELECT_BURGERS_OF_CART: self._select_burgers_of_cart,
            queries.DELETE_BURGERS_OF_CART: self._delete_burgers_of_cart,
            queries.DELETE_BURGERS_BY_ID: self._delete_burgers_by_id,
            queries.RETAIN_BURGERS: self._retain_burgers,
        }

    # ── seeding / inspection ──────────────────────────────

    def seed_cart(self, active: bool = True) -> int:
        cart_id = self._next_cart_id
        self._next_cart_id += 1
        self.carts[cart_id] = {"id": cart_id, "active": active}
        return cart_id

    def seed_burger(self, cart_id, patty_type="MEAT", cheese=False, salad=False, tomato=False) -> int:
        burger_id = self._next_burger_id
        self._next_burger_id += 1
        self.burgers[burger_id] = {
            "id": burger_id,
            "patty_type": patty_type,
            "cheese": cheese,
            "salad": salad,
            "tomato": tomato,
            "cart_id": cart_id,
        }
        return burger_id

    def burger_rows(self, cart_id) -> list[dict]:
        return [b for _, b in sorted(self.burgers.items()) if b["cart_id"] == cart_id]

    def snapshot(self):
        return copy.deepcopy((self.carts, self.burgers))

    def restore(self, snapshot):
        self.carts, self.burgers = copy.deepcopy(snapshot)

    # ── execution ─────────────────────────────────────────

    def execute(self, sql, params):
        self.statements.append(sql)
        if sql in self.errors:
            raise self.errors[sql]
        return self._handlers[sql](params)

    def _key_withheld(self, sql) -> bool:
        if sql in self.no_returning:
            return True
        if sql in self.key_budget:
            if self.key_budget[sql] <= 0:
                return True
            self.key_budget[sql] -= 1
        return False

    def _insert_cart(self, params):
        if self._key_withheld(queries.INSERT_CART):
            return [], 0
        cart_id = self.seed_cart()
        return [dict(self.carts[cart_id])], 1

    def _select_cart_by_id(self, params):
        cart = self.carts.get(params[0])
        if cart is None:
            return [], 0
        return [{"cart_id": cart["id"], "active": cart["active"]}], 1

    def _checkout_cart(self, params):
        cart = self.carts.get(params[0])
        if cart is None:
            return [], 0
        cart["active"] = False
        return [], 1

    def _delete_cart(self, params):
        if self.carts.pop(params[0], None) is None:
            return [], 0
        for burger_id in [b["id"] for b in self.burger_rows(params[0])]:
            del self.burgers[burger_id]
        return [], 1

    def _joined_rows(self, carts):
        rows = []
        for cart in sorted(carts, key=lambda c: c["id"]):
            burgers = self.burger_rows(cart["id"])
            if not burgers:
                rows.append({
                    "cart_id": cart["id"], "active": cart["active"],
                    "id": None, "patty_type": None, "cheese": None, "salad": None, "tomato": None,
                })
            for b in burgers:
                rows.append({"cart_id": cart["id"], "active": cart["active"], **_burger_columns(b)})
        return rows

    def _select_active_cart(self, params):
        rows = self._joined_rows([c for c in self.carts.values() if c["active"]])
        return rows, len(rows)

    def _select_all_carts(self, params):
        rows = self._joined_rows(self.carts.values())
        return rows, len(rows)

    def _insert_burger(self, params):
        if self._key_withheld(queries.INSERT_BURGER):
            return [], 0
        patty_type, cheese, salad, tomato, cart_id = params
        burger_id = self.seed_burger(cart_id, patty_type, cheese, salad, tomato)
        return [{"id": burger_id}], 1

    def _select_burgers_of_cart(self, params):
        rows = [_burger_columns(b) for b in self.burger_rows(params[0])]
        return rows, len(rows)

    def _delete_where(self, predicate):
        doomed = [bid for bid, b in self.burgers.items() if predicate(b)]
        for bid in doomed:
            del self.burgers[bid]
        return [], len(doomed)

    def _delete_burgers_of_cart(self, params):
        return self._delete_where(lambda b: b["cart_id"] == params[0])

    def _delete_burgers_by_id(self, params):
        cart_id, ids = params
        return self._delete_where(lambda b: b["cart_id"] == cart_id and b["id"] in ids)

    def _retain_burgers(self, params):
        cart_id, ids = params
        return self._delete_where(lambda b: b["cart_id"] == cart_id and b["id"] not in ids)


def _burger_columns(burger):
    return {k: burger[k] for k in ("id", "patty_type", "cheese", "salad", "tomato")}


class FakeCursor:
    def __init__(self, store):
        self.store = store
        self._results: list[dict] = []
        self.rowcount = -1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=None):
        results, self.rowcount = self.store.execute(sql, params)
        self._results = list(results)

    def fetchone(self):
        return self._results.pop(0) if self._results else None

    def fetchall(self):
        results, self._results = self._results, []
        return results


class FakeConnection:
    def __init__(self, store):
        self.store = store
        self._snapshot = store.snapshot()
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, cursor_factory=None):
        return FakeCursor(self.store)

    def commit(self):
        self.commits += 1
        self._snapshot = self.store.snapshot()

    def rollback(self):
        self.rollbacks += 1
        self.store.restore(self._snapshot)


class FakePool:
    def __init__(self, store):
        self.store = store
        self.connections: list[FakeConnection] = []
        self.outstanding = 0

    def get_connection(self):
        conn = FakeConnection(self.store)
        self.connections.append(conn)
        self.outstanding += 1
        return conn

    def release_connection(self, conn):
        self.outstanding -= 1

    @property
    def last_connection(self) -> FakeConnection:
        return self.connections[-1]


@pytest.fixture()
def store():
    return FakeStore()


@pytest.fixture()
def fake_pool(store):
    return FakePool(store)


@pytest.fixture()
def cart_repo(fake_pool):
    return CartRepository(fake_pool)


@pytest.fixture()
def burger_repo(fake_pool):
    return BurgerRepository(fake_pool)


@pytest.fixture()
def cart_service(cart_repo, burger_repo):
    return CartService(cart_repo, burger_repo)


@pytest.fixture()
def store_error():
    return psycopg2.OperationalError("server closed the connection unexpectedly")
