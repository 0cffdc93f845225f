"""Statistics engines: period diffs and daily series."""
from account_monitor.stats.base import NO_DATA, NoDataAvailable, PreconditionError
from account_monitor.stats.daily import AccountDaily
from account_monitor.stats.diff import (
    AccountDailyDiff,
    AccountMonthlyDiff,
    DiffStrategy,
    Granularity,
    create_diff,
)

__all__ = [
    "NO_DATA",
    "NoDataAvailable",
    "PreconditionError",
    "AccountDaily",
    "AccountDailyDiff",
    "AccountMonthlyDiff",
    "DiffStrategy",
    "Granularity",
    "create_diff",
]
