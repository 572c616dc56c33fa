"""Service layer for Habitual."""

from . import analytics, completions, feed, follows, habits, periods, streaks, users

__all__ = [
    "analytics",
    "completions",
    "feed",
    "follows",
    "habits",
    "periods",
    "streaks",
    "users",
]
