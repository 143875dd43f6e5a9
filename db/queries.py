"""
db/queries.py
-------------
Every SQL statement issued against the `cart` and `burger` tables.
Parameters are bound positionally, so column order in the INSERT
statements is part of the contract with the row codec.
"""

# ── cart ──────────────────────────────────────────────────

INSERT_CART = "INSERT INTO cart DEFAULT VALUES RETURNING id, active;"

SELECT_CART_BY_ID = "SELECT cart.id AS cart_id, cart.active FROM cart WHERE cart.id = %s;"

CHECKOUT_CART = "UPDATE cart SET active = FALSE WHERE id = %s;"

DELETE_CART = "DELETE FROM cart WHERE id = %s;"

SELECT_ACTIVE_CART = """
    SELECT cart.id AS cart_id, cart.active,
           burger.id, burger.patty_type, burger.cheese, burger.salad, burger.tomato
    FROM cart
    LEFT JOIN burger ON burger.cart_id = cart.id
    WHERE cart.active = TRUE
    ORDER BY cart.id, burger.id;
"""

SELECT_ALL_CARTS = """
    SELECT cart.id AS cart_id, cart.active,
           burger.id, burger.patty_type, burger.cheese, burger.salad, burger.tomato
    FROM cart
    LEFT JOIN burger ON burger.cart_id = cart.id
    ORDER BY cart.id, burger.id;
"""

# ── burger ────────────────────────────────────────────────

INSERT_BURGER = """
    INSERT INTO burger (patty_type, cheese, salad, tomato, cart_id)
    VALUES (%s, %s, %s, %s, %s)
    RETURNING id;
"""

SELECT_BURGERS_OF_CART = """
    SELECT burger.id, burger.patty_type, burger.cheese, burger.salad, burger.tomato
    FROM burger
    WHERE burger.cart_id = %s
    ORDER BY burger.id;
"""

DELETE_BURGERS_OF_CART = "DELETE FROM burger WHERE cart_id = %s;"

DELETE_BURGERS_BY_ID = "DELETE FROM burger WHERE cart_id = %s AND id = ANY(%s);"

RETAIN_BURGERS = "DELETE FROM burger WHERE cart_id = %s AND NOT (id = ANY(%s));"
