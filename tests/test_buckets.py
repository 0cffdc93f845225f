"""Tests for calendar bucket SQL and UTC day cuts."""
from datetime import datetime, timedelta, timezone

from sqlalchemy.dialects import postgresql, sqlite

from account_monitor.models.account_stats import AccountStats
from account_monitor.stats.buckets import day_bucket, month_bucket
from account_monitor.stats.daily import _utc_day


def _sql(expression, dialect) -> str:
    return str(expression.compile(dialect=dialect))


def test_postgresql_buckets_cut_in_utc():
    day = _sql(day_bucket(AccountStats.created_at), postgresql.dialect())
    month = _sql(month_bucket(AccountStats.created_at), postgresql.dialect())
    assert day == "date_trunc('day', (account_stats.created_at) AT TIME ZONE 'UTC')"
    assert month == "date_trunc('month', (account_stats.created_at) AT TIME ZONE 'UTC')"


def test_sqlite_buckets_format_stored_utc():
    day = _sql(day_bucket(AccountStats.created_at), sqlite.dialect()).replace("%%", "%")
    month = _sql(month_bucket(AccountStats.created_at), sqlite.dialect()).replace("%%", "%")
    assert day == "strftime('%Y-%m-%d', account_stats.created_at)"
    assert month == "strftime('%Y-%m', account_stats.created_at)"


def test_series_day_is_utc_day():
    berlin = timezone(timedelta(hours=2))
    late_evening_utc = datetime(2024, 6, 11, 1, 30, tzinfo=berlin)
    assert late_evening_utc.date().isoformat() == "2024-06-11"
    assert _utc_day(late_evening_utc).isoformat() == "2024-06-10"
    assert _utc_day(datetime(2024, 6, 10, 23, 30)).isoformat() == "2024-06-10"
