"""Account data access layer."""
import uuid as _uuid

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from account_monitor.models.account import Account
from account_monitor.models.account_stats import AccountStats
from account_monitor.models.media import Media, MediaAccount, MediaTag, Tag


async def get_by_id(db: AsyncSession, account_id: _uuid.UUID) -> Account | None:
    return (await db.execute(select(Account).where(Account.id == account_id))).scalar_one_or_none()


async def list_stats(
    db: AsyncSession,
    account_id: _uuid.UUID,
    *,
    skip: int = 0,
    limit: int | None = 50,
) -> tuple[list[AccountStats], int]:
    q = select(AccountStats).where(AccountStats.account_id == account_id)
    count_q = select(func.count()).select_from(AccountStats).where(AccountStats.account_id == account_id)

    total = (await db.execute(count_q)).scalar() or 0
    q = q.order_by(AccountStats.created_at.desc(), AccountStats.id.desc()).offset(skip)
    if limit is not None:
        q = q.limit(limit)
    rows = (await db.execute(q)).scalars().all()
    return list(rows), total


async def media_tag_counts(
    db: AsyncSession,
    account_id: _uuid.UUID,
    *,
    skip: int = 0,
    limit: int | None = 50,
) -> tuple[list[dict], int]:
    """Tags used in the account's media with their number of occurrences."""
    occurs = func.count(Tag.id).label("occurs")
    q = (
        select(Tag.id, Tag.name, occurs)
        .join(MediaTag, MediaTag.tag_id == Tag.id)
        .join(Media, Media.id == MediaTag.media_id)
        .where(Media.account_id == account_id)
        .group_by(Tag.id, Tag.name)
    )
    total = (await db.execute(select(func.count()).select_from(q.subquery()))).scalar() or 0

    q = q.order_by(occurs.desc(), Tag.name.asc()).offset(skip)
    if limit is not None:
        q = q.limit(limit)
    rows = (await db.execute(q)).all()
    return [{"id": row.id, "name": row.name, "occurs": row.occurs} for row in rows], total


async def media_account_counts(
    db: AsyncSession,
    account_id: _uuid.UUID,
    *,
    skip: int = 0,
    limit: int | None = 50,
) -> tuple[list[dict], int]:
    """Accounts mentioned in the account's media with their number of occurrences."""
    occurs = func.count(Account.id).label("occurs")
    q = (
        select(Account.id, Account.username, occurs)
        .join(MediaAccount, MediaAccount.account_id == Account.id)
        .join(Media, Media.id == MediaAccount.media_id)
        .where(Media.account_id == account_id)
        .group_by(Account.id, Account.username)
    )
    total = (await db.execute(select(func.count()).select_from(q.subquery()))).scalar() or 0

    q = q.order_by(occurs.desc(), Account.username.asc()).offset(skip)
    if limit is not None:
        q = q.limit(limit)
    rows = (await db.execute(q)).all()
    return [{"id": row.id, "username": row.username, "occurs": row.occurs} for row in rows], total


async def delete_stats(db: AsyncSession, account_id: _uuid.UUID) -> int:
    result = await db.execute(delete(AccountStats).where(AccountStats.account_id == account_id))
    return result.rowcount


async def delete_media(db: AsyncSession, account_id: _uuid.UUID) -> int:
    result = await db.execute(delete(Media).where(Media.account_id == account_id))
    return result.rowcount


async def delete_account(db: AsyncSession, account_id: _uuid.UUID) -> int:
    result = await db.execute(delete(Account).where(Account.id == account_id))
    return result.rowcount
