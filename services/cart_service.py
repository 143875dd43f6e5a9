"""
services/cart_service.py
------------------------
Use cases for carts and their burgers, as exposed to the presentation
layer. Enforces the preconditions the repositories leave to their
callers (cart exists, cart not checked out, burger ids belong to the cart)
and turns repository failure flags into exceptions.
"""

from typing import Iterable

from models.burger import Burger
from models.cart import Cart
from repositories.burger_repo import BurgerRepository
from repositories.cart_repo import CartRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class CartServiceError(Exception):
    """Base class for cart use-case failures."""


class CartNotFoundError(CartServiceError):
    def __init__(self, cart_id: int):
        super().__init__(f"No cart could be found for id {cart_id}")
        self.cart_id = cart_id


class BurgerNotFoundError(CartServiceError):
    def __init__(self, cart_id: int, burger_ids: list[int]):
        super().__init__(f"No burger(s) {burger_ids} in cart {cart_id}")
        self.cart_id = cart_id
        self.burger_ids = burger_ids


class CartCheckedOutError(CartServiceError):
    def __init__(self, cart_id: int):
        super().__init__(f"Cart {cart_id} is already checked out")
        self.cart_id = cart_id


class PersistenceError(CartServiceError):
    """The store did not confirm a write."""


class CartService:
    """
    Orchestrates the cart and burger repositories.

    Workflow for every mutation:
        1. Load the cart (CartNotFoundError if missing).
        2. Refuse to touch a checked-out cart.
        3. Write through the repository and check its result.
    """

    def __init__(self, cart_repo: CartRepository, burger_repo: BurgerRepository):
        self.cart_repo = cart_repo
        self.burger_repo = burger_repo

    # ── QUERIES ───────────────────────────────────────────

    def get_cart(self, cart_id: int) -> Cart:
        cart = self.cart_repo.get_cart_by_id(cart_id)
        if cart is None:
            raise CartNotFoundError(cart_id)
        return cart

    def list_carts(self) -> list[Cart]:
        return self.cart_repo.get_all_carts()

    def get_active_cart(self) -> Cart:
        return self.cart_repo.get_active_cart()

    def get_burgers(self, cart_id: int) -> list[Burger]:
        return self.get_cart(cart_id).burgers

    def get_burger(self, cart_id: int, burger_id: int) -> Burger:
        burger = self.get_cart(cart_id).find_burger(burger_id)
        if burger is None:
            raise BurgerNotFoundError(cart_id, [burger_id])
        return burger

    # ── COMMANDS ──────────────────────────────────────────

    def create_cart(self, burgers: Iterable[Burger] = ()) -> Cart:
        """Create a new cart, optionally filled with burgers, in one transaction."""
        cart = self.save(Cart(burgers=list(burgers)))
        logger.info(f"Created cart #{cart.id} with {len(cart.burgers)} burger(s)")
        return cart

    def save(self, cart: Cart) -> Cart:
        """Reconcile an in-memory cart into the store."""
        if not self.cart_repo.update(cart):
            raise PersistenceError(f"Could not save {cart}")
        return cart

    def add_burger(self, cart_id: int, burger: Burger) -> Burger:
        cart = self._get_open_cart(cart_id)
        if not self.burger_repo.persist_burger(burger, cart):
            raise PersistenceError(f"Could not add burger to cart {cart_id}")
        return burger

    def replace_burgers(self, cart_id: int, burgers: Iterable[Burger]) -> Cart:
        """Swap the cart's whole burger list in a single reconciliation."""
        cart = self._get_open_cart(cart_id)
        cart.burgers = list(burgers)
        return self.save(cart)

    def remove_burgers(self, cart_id: int, burger_ids: list[int]) -> None:
        if not burger_ids:
            raise ValueError("At least one burger id is required")
        cart = self._get_open_cart(cart_id)
        missing = [bid for bid in burger_ids if cart.find_burger(bid) is None]
        if missing:
            raise BurgerNotFoundError(cart_id, missing)
        if not self.burger_repo.delete_burgers_by_id(cart, burger_ids):
            raise PersistenceError(f"Could not delete burgers from cart {cart_id}")

    def checkout(self, cart_id: int) -> Cart:
        cart = self._get_open_cart(cart_id)
        if not self.cart_repo.checkout_cart(cart):
            raise PersistenceError(f"Could not check out cart {cart_id}")
        return cart

    def delete_cart(self, cart_id: int) -> None:
        if not self.cart_repo.delete_cart(cart_id):
            raise CartNotFoundError(cart_id)

    # ── HELPERS ───────────────────────────────────────────

    def _get_open_cart(self, cart_id: int) -> Cart:
        cart = self.get_cart(cart_id)
        if cart.checked_out:
            raise CartCheckedOutError(cart_id)
        return cart
