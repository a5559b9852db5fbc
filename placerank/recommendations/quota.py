from __future__ import annotations

import threading

from ..errors import QuotaExceededError
from .config import SEARCH_LIMIT_PER_USER

# Lifetime search counters per user. Counters only grow.
_usage: dict[str, int] = {}
# Endpoints run in a thread pool; check and increment happen under one lock.
_lock = threading.Lock()


def consume_search(user_id: str, limit: int = SEARCH_LIMIT_PER_USER) -> int:
    """Count one search for ``user_id``; raise once the ceiling is reached."""
    with _lock:
        current = _usage.get(user_id, 0)
        if current >= limit:
            raise QuotaExceededError(f"You reached your lifetime limit of {limit} searches.")
        _usage[user_id] = current + 1
        return _usage[user_id]


def get_usage(user_id: str) -> int:
    return _usage.get(user_id, 0)


def clear_usage() -> None:
    with _lock:
        _usage.clear()
