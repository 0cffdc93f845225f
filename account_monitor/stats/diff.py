"""Period-over-period statistics diffs for a batch of accounts.

Each ``init_*`` call runs one SELECT for every bound account and keeps the
resulting records in memory until the next call; the ``get_*`` accessors only
read from that cache. Snapshots after ``now`` are ignored.
"""
import enum
import logging
import uuid
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from account_monitor.models.account_stats import AccountStats
from account_monitor.schemas.stats import DiffRecord, StatsValues
from account_monitor.stats.base import (
    NO_DATA,
    AccountRef,
    NoDataAvailable,
    PreconditionError,
    account_ids,
)
from account_monitor.stats.buckets import day_bucket, month_bucket
from account_monitor.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class Granularity(str, enum.Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


class DiffStrategy:
    """Base diff engine; subclasses choose the calendar bucket."""

    granularity: Granularity

    def __init__(
        self,
        db: AsyncSession,
        accounts: AccountRef | Iterable[AccountRef],
        *,
        now: datetime | None = None,
    ):
        self.db = db
        self.account_ids = account_ids(accounts)
        self.now = now
        self._diff: dict[uuid.UUID, DiffRecord] | None = None
        self._last_diff: dict[uuid.UUID, DiffRecord] | None = None

    def bucket(self, column):
        raise NotImplementedError

    # ── Reference-time diff ─────────────────────────────────────────────

    async def init_diff(self, reference_time: datetime) -> None:
        """Diff the snapshot in effect at ``reference_time`` against the latest one.

        The "from" side is the latest snapshot at or before ``reference_time``;
        when the account has none, the earliest snapshot after it is used.
        """
        self._diff = {}
        if not self.account_ids:
            return

        before = case((AccountStats.created_at <= reference_time, 1), else_=0)
        newest_first = (AccountStats.created_at.desc(), AccountStats.id.desc())
        oldest_first = (AccountStats.created_at.asc(), AccountStats.id.asc())
        ranked = (
            select(
                AccountStats,
                func.row_number()
                .over(partition_by=AccountStats.account_id, order_by=newest_first)
                .label("latest_rank"),
                func.row_number()
                .over(partition_by=(AccountStats.account_id, before), order_by=newest_first)
                .label("desc_rank"),
                func.row_number()
                .over(partition_by=(AccountStats.account_id, before), order_by=oldest_first)
                .label("asc_rank"),
                before.label("before_reference"),
            )
            .where(
                AccountStats.account_id.in_(self.account_ids),
                AccountStats.created_at <= self._current_time(),
            )
            .subquery()
        )
        stats = aliased(AccountStats, ranked)
        stmt = select(
            stats,
            ranked.c.latest_rank,
            ranked.c.desc_rank,
            ranked.c.asc_rank,
            ranked.c.before_reference,
        ).where(
            or_(
                ranked.c.latest_rank == 1,
                and_(ranked.c.before_reference == 1, ranked.c.desc_rank == 1),
                and_(ranked.c.before_reference == 0, ranked.c.asc_rank == 1),
            )
        )
        rows = (await self.db.execute(stmt)).all()

        latest: dict[uuid.UUID, AccountStats] = {}
        at_reference: dict[uuid.UUID, AccountStats] = {}
        after_reference: dict[uuid.UUID, AccountStats] = {}
        for snapshot, latest_rank, desc_rank, asc_rank, before_reference in rows:
            if latest_rank == 1:
                latest[snapshot.account_id] = snapshot
            if before_reference == 1 and desc_rank == 1:
                at_reference[snapshot.account_id] = snapshot
            if before_reference == 0 and asc_rank == 1:
                after_reference[snapshot.account_id] = snapshot

        for account_id, to_snapshot in latest.items():
            from_snapshot = at_reference.get(account_id) or after_reference[account_id]
            self._diff[account_id] = self._build_record(account_id, from_snapshot, to_snapshot)

        logger.debug(
            "%s diff since %s: %d of %d accounts with data",
            self.granularity.value, reference_time, len(self._diff), len(self.account_ids),
        )

    def get_diff(self, account_id: uuid.UUID) -> DiffRecord | NoDataAvailable:
        if self._diff is None:
            raise PreconditionError("init_diff() must be called before get_diff()")
        return self._diff.get(account_id, NO_DATA)

    # ── Last-change diff ────────────────────────────────────────────────

    async def init_last_diff(self) -> None:
        """Diff the latest snapshots of the two most recent calendar buckets."""
        self._last_diff = {}
        if not self.account_ids:
            return

        bucket = self.bucket(AccountStats.created_at)
        per_bucket = (
            select(
                AccountStats,
                func.row_number()
                .over(
                    partition_by=(AccountStats.account_id, bucket),
                    order_by=(AccountStats.created_at.desc(), AccountStats.id.desc()),
                )
                .label("bucket_rank"),
            )
            .where(
                AccountStats.account_id.in_(self.account_ids),
                AccountStats.created_at <= self._current_time(),
            )
            .subquery()
        )
        heads = aliased(AccountStats, per_bucket)
        recent = (
            select(
                heads,
                func.row_number()
                .over(
                    partition_by=heads.account_id,
                    order_by=(heads.created_at.desc(), heads.id.desc()),
                )
                .label("recency"),
            )
            .where(per_bucket.c.bucket_rank == 1)
            .subquery()
        )
        stats = aliased(AccountStats, recent)
        stmt = (
            select(stats)
            .where(recent.c.recency <= 2)
            .order_by(stats.account_id, recent.c.recency)
        )
        snapshots = (await self.db.execute(stmt)).scalars().all()

        pairs: dict[uuid.UUID, list[AccountStats]] = {}
        for snapshot in snapshots:
            pairs.setdefault(snapshot.account_id, []).append(snapshot)

        for account_id, (to_snapshot, *previous) in pairs.items():
            if previous:
                self._last_diff[account_id] = self._build_record(account_id, previous[0], to_snapshot)

        logger.debug(
            "%s last diff: %d of %d accounts with two buckets",
            self.granularity.value, len(self._last_diff), len(self.account_ids),
        )

    def get_last_diff(self, account_id: uuid.UUID) -> DiffRecord | NoDataAvailable:
        if self._last_diff is None:
            raise PreconditionError("init_last_diff() must be called before get_last_diff()")
        return self._last_diff.get(account_id, NO_DATA)

    # ── Helpers ─────────────────────────────────────────────────────────

    def _current_time(self) -> datetime:
        return self.now or utc_now()

    def _build_record(
        self, account_id: uuid.UUID, from_snapshot: AccountStats, to_snapshot: AccountStats
    ) -> DiffRecord:
        from_values = StatsValues.from_snapshot(from_snapshot)
        to_values = StatsValues.from_snapshot(to_snapshot)
        return DiffRecord(
            account_id=account_id,
            granularity=self.granularity.value,
            from_snapshot_id=from_snapshot.id,
            to_snapshot_id=to_snapshot.id,
            period_start=from_snapshot.created_at,
            period_end=to_snapshot.created_at,
            from_values=from_values,
            to_values=to_values,
            delta=to_values.minus(from_values),
        )


class AccountDailyDiff(DiffStrategy):
    granularity = Granularity.DAILY

    def bucket(self, column):
        return day_bucket(column)


class AccountMonthlyDiff(DiffStrategy):
    granularity = Granularity.MONTHLY

    def bucket(self, column):
        return month_bucket(column)


_STRATEGIES: dict[Granularity, type[DiffStrategy]] = {
    Granularity.DAILY: AccountDailyDiff,
    Granularity.MONTHLY: AccountMonthlyDiff,
}


def create_diff(
    granularity: Granularity,
    db: AsyncSession,
    accounts: AccountRef | Iterable[AccountRef],
    *,
    now: datetime | None = None,
) -> DiffStrategy:
    return _STRATEGIES[Granularity(granularity)](db, accounts, now=now)
