"""
High-level use cases for the Redfin member API.

Routers (FastAPI endpoints) call these services instead of opening database
sessions directly.
"""
