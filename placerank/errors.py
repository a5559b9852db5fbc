"""
Error taxonomy surfaced by the HTTP layer.

Engine components never raise; only the I/O boundary (catalog reads,
directory, geocoding and summary calls) produces these, and the app renders
each as ``{"error": message}`` with its status code.
"""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class PlaceRankError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(PlaceRankError):
    """Required credentials or endpoints are missing. Never retried."""

    status_code = 500


class ValidationError(PlaceRankError):
    status_code = 400


class UpstreamDataError(PlaceRankError):
    """The catalog (400) or an external service (502) returned an error."""

    status_code = 400


class NotFoundError(PlaceRankError):
    status_code = 404


class QuotaExceededError(PlaceRankError):
    status_code = 429


_RETRY_MESSAGE = "We had a problem processing the search. Please try again."


def sanitize_upstream_message(raw: str | None) -> str:
    """Replace raw backend error text with a neutral user-facing message."""
    m = (raw or "").lower()
    if "user_search_limits" in m and ("schema cache" in m or "could not find" in m):
        return "Search limits are still being activated. Please try again in a few seconds."
    if "relation" in m and "does not exist" in m:
        return "There is a configuration problem on our side. We are working on it."
    if "jwt" in m or "token" in m or "auth" in m:
        return "Your session expired. Sign in again to keep searching."
    return _RETRY_MESSAGE


def upstream_error(raw: str | None, status_code: int = 400) -> UpstreamDataError:
    logger.warning("Upstream data error: %s", raw)
    return UpstreamDataError(sanitize_upstream_message(raw), status_code=status_code)
