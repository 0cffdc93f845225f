"""Account admin business logic."""
import logging
import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from account_monitor.config import settings
from account_monitor.middleware.error_handler import EntityNotFound
from account_monitor.models.account import Account
from account_monitor.models.user import User
from account_monitor.repositories import account_repository
from account_monitor.schemas.account import AccountResponse, AccountSettingsUpdate, Dashboard
from account_monitor.services import category_service, note_service
from account_monitor.stats import NO_DATA, AccountDaily, Granularity, create_diff
from account_monitor.updaters.account_updater import AccountUpdater
from account_monitor.utils.helpers import months_ago, utc_now

logger = logging.getLogger(__name__)


async def find_account(db: AsyncSession, account_id: uuid.UUID) -> Account:
    account = await account_repository.get_by_id(db, account_id)
    if account is None:
        raise EntityNotFound("Account", account_id)
    return account


async def update_settings(db: AsyncSession, account: Account, data: AccountSettingsUpdate) -> Account:
    """Apply the settings form in a single UPDATE.

    Disabling an account stops its monitoring and leaves its next stats update
    alone. Re-validating an enabled account clears its next stats update so the
    collector picks it up on its next run.
    """
    updater = AccountUpdater(db, account)
    if "name" in data.model_fields_set:
        updater.set_name(data.name)
    if data.monitoring is not None:
        updater.set_monitoring(data.monitoring)
    if data.disabled is not None:
        updater.set_disabled(data.disabled)

    disabled = account.disabled if data.disabled is None else data.disabled
    if disabled:
        updater.set_monitoring(False)
        if data.is_valid is not None:
            updater.set_is_valid(data.is_valid)
    elif data.is_valid:
        updater.set_is_valid().set_next_stats_update(None)
    elif data.is_valid is not None:
        updater.set_is_valid(False)

    return await updater.save()


async def delete_stats(db: AsyncSession, account_id: uuid.UUID) -> int:
    deleted = await account_repository.delete_stats(db, account_id)
    logger.info("Deleted %d stats rows of account %s", deleted, account_id)
    return deleted


async def delete_associated(db: AsyncSession, account_id: uuid.UUID) -> int:
    deleted = await account_repository.delete_media(db, account_id)
    logger.info("Deleted %d media rows of account %s", deleted, account_id)
    return deleted


async def delete_account(db: AsyncSession, account_id: uuid.UUID) -> int:
    deleted = await account_repository.delete_account(db, account_id)
    if not deleted:
        raise EntityNotFound("Account", account_id)
    logger.info("Deleted account %s", account_id)
    return deleted


async def build_dashboard(
    db: AsyncSession, account: Account, user: User, now: datetime | None = None
) -> Dashboard:
    now = now or utc_now()
    since_month = months_ago(settings.DAILY_DIFF_MONTHS, now)
    since_year = months_ago(settings.MONTHLY_DIFF_MONTHS, now)

    daily_diff = create_diff(Granularity.DAILY, db, account, now=now)
    await daily_diff.init_diff(since_month)
    daily_changes = daily_diff.get_diff(account.id)
    await daily_diff.init_last_diff()
    last_daily_change = daily_diff.get_last_diff(account.id)

    monthly_diff = create_diff(Granularity.MONTHLY, db, account, now=now)
    await monthly_diff.init_diff(since_year)
    monthly_changes = monthly_diff.get_diff(account.id)
    await monthly_diff.init_last_diff()
    last_monthly_change = monthly_diff.get_last_diff(account.id)

    daily_stats = AccountDaily(db, account)
    await daily_stats.init_data(since_month)

    note = await note_service.get_note(db, account, user)
    categories = await category_service.get_for_account(db, user, account)

    return Dashboard(
        account=AccountResponse.model_validate(account),
        daily_changes=None if daily_changes is NO_DATA else daily_changes,
        last_daily_change=None if last_daily_change is NO_DATA else last_daily_change,
        monthly_changes=None if monthly_changes is NO_DATA else monthly_changes,
        last_monthly_change=None if last_monthly_change is NO_DATA else last_monthly_change,
        daily_stats=daily_stats.get_for(account.id),
        note=note.note if note else None,
        categories=categories,
    )
