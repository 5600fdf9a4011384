"""Shared utilities: UTC datetimes."""

from app.shared.utils.datetime import ensure_utc, utc_now

__all__ = [
    "ensure_utc",
    "utc_now",
]
