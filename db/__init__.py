"""
db/ - Database Layer
====================
Handles PostgreSQL connections, schema initialization, the SQL statement
catalogue and the typed store errors.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
