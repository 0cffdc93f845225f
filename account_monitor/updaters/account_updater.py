"""Staged account updates committed in a single statement."""
import logging
from datetime import datetime
from typing import Any

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from account_monitor.models.account import Account

logger = logging.getLogger(__name__)


class AccountUpdater:
    """Collect field changes for one account and write them with one UPDATE.

    Setters return the updater so calls can be chained::

        await AccountUpdater(db, account).set_is_valid().set_next_stats_update(None).save()

    Only the scheduling intent is recorded here; collection itself is run by
    the external polling job reading ``next_stats_update``.
    """

    def __init__(self, db: AsyncSession, account: Account):
        self.db = db
        self.account = account
        self._changes: dict[str, Any] = {}

    @property
    def changes(self) -> dict[str, Any]:
        return dict(self._changes)

    def set_is_valid(self, value: bool = True) -> "AccountUpdater":
        self._changes["is_valid"] = value
        if value:
            self._changes["invalidation_count"] = 0
        return self

    def set_next_stats_update(self, value: datetime | None) -> "AccountUpdater":
        self._changes["next_stats_update"] = value
        return self

    def set_monitoring(self, value: bool) -> "AccountUpdater":
        self._changes["monitoring"] = value
        return self

    def set_disabled(self, value: bool) -> "AccountUpdater":
        self._changes["disabled"] = value
        return self

    def set_name(self, value: str | None) -> "AccountUpdater":
        self._changes["name"] = value
        return self

    async def save(self) -> Account:
        if not self._changes:
            return self.account

        changes = self._changes
        await self.db.execute(
            update(Account)
            .where(Account.id == self.account.id)
            .values(**changes)
            .execution_options(synchronize_session=False)
        )
        await self.db.refresh(self.account)
        self._changes = {}

        logger.info("Account %s updated: %s", self.account.id, ", ".join(sorted(changes)))
        return self.account
