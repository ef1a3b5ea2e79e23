"""
API Package - Exports all API routers
"""

from app.api import users, todos

__all__ = ["users", "todos"]
