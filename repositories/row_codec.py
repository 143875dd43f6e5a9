"""
repositories/row_codec.py
-------------------------
Pure mapping between relational rows and domain objects.
Rows are any mapping of column name to value, e.g. the dicts returned
by psycopg2's RealDictCursor. No I/O happens here.
"""

from typing import Any, Mapping, Optional

from db.errors import DecodeError
from models.burger import Burger, PattyType
from models.cart import Cart

Row = Mapping[str, Any]


def decode_patty_type(label: Optional[str]) -> PattyType:
    """
    Map a stored patty label to PattyType.

    Raises:
        DecodeError: If the label is not a known patty type.
    """
    try:
        return PattyType(label)
    except ValueError as e:
        raise DecodeError(f"Unknown patty type stored: {label!r}") from e


def decode_burger(row: Row) -> Burger:
    """Convert a burger row to a Burger domain object."""
    return Burger(
        id=row["id"],
        patty_type=decode_patty_type(row["patty_type"]),
        cheese=bool(row["cheese"]),
        salad=bool(row["salad"]),
        tomato=bool(row["tomato"]),
    )


def encode_burger(burger: Burger, cart_id: int) -> tuple:
    """
    Build the positional parameters for `queries.INSERT_BURGER`.

    Order: patty_type, cheese, salad, tomato, cart_id.
    """
    return (
        burger.patty_type.value,
        bool(burger.cheese),
        bool(burger.salad),
        bool(burger.tomato),
        cart_id,
    )


def decode_cart_identity(row: Row) -> tuple[int, bool]:
    """
    Read (id, checked_out) from a cart row.

    The stored `active` flag is the inverse of `checked_out`.
    Joined rows carry the cart id as `cart_id`; plain cart rows as `id`.
    """
    cart_id = row["cart_id"] if "cart_id" in row else row["id"]
    return cart_id, not row["active"]


def decode_cart(row: Row) -> Cart:
    """Convert a cart row to a Cart without burgers."""
    cart_id, checked_out = decode_cart_identity(row)
    return Cart(id=cart_id, checked_out=checked_out)


def has_burger(row: Row) -> bool:
    """False for the burger-less rows an outer join yields for empty carts."""
    return row.get("id") is not None
