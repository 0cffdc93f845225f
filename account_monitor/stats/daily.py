"""Daily statistics series for dashboard charts."""
import logging
import uuid
from collections.abc import Iterable
from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from account_monitor.models.account_stats import AccountStats
from account_monitor.schemas.stats import StatsPoint
from account_monitor.stats.base import AccountRef, PreconditionError, account_ids

logger = logging.getLogger(__name__)


def _utc_day(moment: datetime) -> date:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


class AccountDaily:
    """Load snapshots since a point in time and reduce them to one per day.

    When an account has several snapshots on the same UTC day, the one
    captured last wins.
    """

    def __init__(self, db: AsyncSession, accounts: AccountRef | Iterable[AccountRef]):
        self.db = db
        self.account_ids = account_ids(accounts)
        self._series: dict[uuid.UUID, list[StatsPoint]] | None = None

    async def init_data(self, since: datetime) -> None:
        self._series = {account_id: [] for account_id in self.account_ids}
        if not self.account_ids:
            return

        stmt = (
            select(AccountStats)
            .where(
                AccountStats.account_id.in_(self.account_ids),
                AccountStats.created_at >= since,
            )
            .order_by(AccountStats.account_id, AccountStats.created_at.asc(), AccountStats.id.asc())
        )
        snapshots = (await self.db.execute(stmt)).scalars().all()

        for snapshot in snapshots:
            series = self._series[snapshot.account_id]
            point = StatsPoint.model_validate(snapshot)
            if series and _utc_day(series[-1].created_at) == _utc_day(point.created_at):
                series[-1] = point
            else:
                series.append(point)

        logger.debug("daily series since %s: %d snapshots loaded", since, len(snapshots))

    def get(self) -> dict[uuid.UUID, list[StatsPoint]]:
        if self._series is None:
            raise PreconditionError("init_data() must be called before get()")
        return self._series

    def get_for(self, account_id: uuid.UUID) -> list[StatsPoint]:
        return self.get().get(account_id, [])
