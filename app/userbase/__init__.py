"""
Userbase listing core.

Query construction, pagination and statistics for the user collection.
"""

from app.userbase.pagination import PageWindow, resolve_window, summarize
from app.userbase.query import UserQuery, build_user_query
from app.userbase.statistics import build_user_stats

__all__ = [
    "PageWindow",
    "UserQuery",
    "build_user_query",
    "build_user_stats",
    "resolve_window",
    "summarize",
]
