"""SQLAlchemy ORM models."""
from account_monitor.models.base import Base, TimestampMixin, UUIDMixin
from account_monitor.models.user import User, UserRole
from account_monitor.models.account import Account
from account_monitor.models.account_stats import STATS_METRICS, AccountStats
from account_monitor.models.account_note import AccountNote
from account_monitor.models.media import Media, MediaAccount, MediaTag, Tag
from account_monitor.models.category import AccountCategory, Category

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "UserRole",
    "Account",
    "AccountStats",
    "STATS_METRICS",
    "AccountNote",
    "Media",
    "MediaAccount",
    "MediaTag",
    "Tag",
    "Category",
    "AccountCategory",
]
