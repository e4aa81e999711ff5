"""
Core utilities shared across the Redfin member API.

Configuration helpers and logging setup live here so that routers and
services never read os.environ or configure handlers themselves.
"""
