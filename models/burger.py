"""
models/burger.py
----------------
Domain model for a single burger in a cart.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PattyType(str, Enum):
    """Closed set of patties a burger can be built on."""
    MEAT = "MEAT"
    VEGGIE = "VEGGIE"


@dataclass
class Burger:
    """
    Represents a burger built from a patty and optional ingredients.

    Attributes:
        patty_type: The patty the burger is built on.
        cheese: Whether the burger has cheese.
        salad: Whether the burger has salad.
        tomato: Whether the burger has tomato.
        id: Database primary key (None until the store assigns one).
    """
    patty_type: PattyType
    cheese: bool = False
    salad: bool = False
    tomato: bool = False
    id: Optional[int] = None

    def __post_init__(self) -> None:
        # Accepts plain labels such as "MEAT"; unknown labels raise ValueError.
        self.patty_type = PattyType(self.patty_type)

    def is_persisted(self) -> bool:
        """Returns True once the store has issued an id."""
        return self.id is not None

    def __str__(self) -> str:
        extras = [name for name in ("cheese", "salad", "tomato") if getattr(self, name)]
        label = f"#{self.id}" if self.is_persisted() else "(new)"
        return f"{label} {self.patty_type.value} burger" + (f" with {', '.join(extras)}" if extras else "")
