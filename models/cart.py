"""
models/cart.py
--------------
Domain model for a shopping cart, the aggregate root owning its burgers.
"""

from dataclasses import dataclass, field
from typing import Optional

from models.burger import Burger


@dataclass
class Cart:
    """
    Represents a cart and the burgers attached to it.

    Attributes:
        id: Database primary key (None for carts not yet persisted).
        checked_out: True once the cart has been checked out. Terminal.
        burgers: Attached burgers in insertion order.
    """
    id: Optional[int] = None
    checked_out: bool = False
    burgers: list[Burger] = field(default_factory=list)

    def is_persisted(self) -> bool:
        return self.id is not None

    def checkout(self) -> None:
        """Move the cart into its terminal checked-out state."""
        self.checked_out = True

    def add_burger(self, burger: Burger) -> None:
        self.burgers.append(burger)

    def remove_burger(self, burger: Burger) -> bool:
        """
        Detach a burger instance from the cart.

        Matching is by object identity, so two attribute-equal pending
        burgers can be told apart.

        Returns:
            True if the burger was attached and has been removed.
        """
        for index, attached in enumerate(self.burgers):
            if attached is burger:
                del self.burgers[index]
                return True
        return False

    def find_burger(self, burger_id: int) -> Optional[Burger]:
        """Returns the attached burger with the given id, or None."""
        return next((b for b in self.burgers if b.id == burger_id), None)

    def burger_ids(self) -> list[int]:
        """Ids of every attached burger that has already been persisted."""
        return [b.id for b in self.burgers if b.id is not None]

    def pending_burgers(self) -> list[Burger]:
        return [b for b in self.burgers if b.id is None]

    def __str__(self) -> str:
        status = "checked out" if self.checked_out else "active"
        label = f"#{self.id}" if self.is_persisted() else "(new)"
        return f"Cart {label} [{status}] with {len(self.burgers)} burger(s)"
