# tenant_console/activity/log.py
import logging
from collections import deque
from datetime import datetime, timezone
from enum import Enum
from typing import Deque, List, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ActivityLevel(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


# Short tags used in the rendered console line
_LEVEL_TAGS = {
    ActivityLevel.INFO: "INF",
    ActivityLevel.WARN: "WRN",
    ActivityLevel.ERROR: "ERR",
}

_LOGGING_LEVELS = {
    ActivityLevel.INFO: logging.INFO,
    ActivityLevel.WARN: logging.WARNING,
    ActivityLevel.ERROR: logging.ERROR,
}


class ActivityEntry(BaseModel):
    """One timestamped line of console activity. Entries are immutable once written."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    level: ActivityLevel = ActivityLevel.INFO
    message: str


def format_entry(entry: ActivityEntry) -> str:
    """Render an entry in local time the way the console shows it, e.g. '[14:03:07 INF] message'."""
    return f"[{entry.timestamp.astimezone().strftime('%H:%M:%S')} {_LEVEL_TAGS[entry.level]}] {entry.message}"


class ActivityLog:
    """
    Append-only ledger of store mutations and generation attempts.

    Entries are kept in a ring buffer of max_entries; once full, the oldest
    entry falls off. Every append is also forwarded to the standard logger.
    """

    def __init__(self, max_entries: int = 500):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: Deque[ActivityEntry] = deque(maxlen=max_entries)

    def append(self, message: str, level: ActivityLevel = ActivityLevel.INFO) -> ActivityEntry:
        entry = ActivityEntry(level=level, message=message)
        self._entries.append(entry)
        logger.log(_LOGGING_LEVELS[level], f"Activity: {message}")
        return entry

    def info(self, message: str) -> ActivityEntry:
        return self.append(message, ActivityLevel.INFO)

    def warn(self, message: str) -> ActivityEntry:
        return self.append(message, ActivityLevel.WARN)

    def error(self, message: str) -> ActivityEntry:
        return self.append(message, ActivityLevel.ERROR)

    def entries(self, level: Optional[ActivityLevel] = None) -> List[ActivityEntry]:
        """Return a copy of the entries, oldest first, optionally filtered by level."""
        if level is None:
            return list(self._entries)
        return [e for e in self._entries if e.level == level]

    def lines(self) -> List[str]:
        return [format_entry(e) for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
