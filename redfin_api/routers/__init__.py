"""
FastAPI routers grouped by domain.

Each module exposes APIRouter objects that the main application (app.py)
includes. Endpoints delegate to services and only translate errors to HTTP.
"""
