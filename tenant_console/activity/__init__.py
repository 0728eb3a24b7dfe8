# tenant_console/activity/__init__.py
"""
Activity log module initialization.

Provides the bounded, append-only activity ledger. The read-only API route
lives in activity.endpoints and is mounted by main.
"""

from .log import ActivityLog, ActivityEntry, ActivityLevel, format_entry

__all__ = [
    "ActivityLog",
    "ActivityEntry",
    "ActivityLevel",
    "format_entry"
]
