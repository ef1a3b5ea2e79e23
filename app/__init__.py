"""
DoNext backend - users own trees of todos (main tasks and subtasks).

Usage:
    from app.services import TodoService
    from app.core.config import settings
"""

__version__ = "1.0.0"
