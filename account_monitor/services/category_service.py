"""Per-user account categories."""
import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from account_monitor.models.account import Account
from account_monitor.models.category import AccountCategory, Category
from account_monitor.models.media import Media, MediaAccount
from account_monitor.models.user import User
from account_monitor.utils.helpers import normalize_names

logger = logging.getLogger(__name__)


async def save_for_account(
    db: AsyncSession, account: Account, tags: list[str], user: User
) -> list[str]:
    """Make ``tags`` the exact set of the user's categories on the account.

    Missing categories are created for the user. Assignments of the user's
    categories that are not listed are removed; those of other users are left
    untouched. Saving the same list twice writes nothing the second time.
    """
    names = normalize_names(tags)

    existing = (
        await db.execute(select(Category).where(Category.user_id == user.id))
    ).scalars().all()
    by_name = {category.name.lower(): category for category in existing}

    selected: list[Category] = []
    for name in names:
        category = by_name.get(name.lower())
        if category is None:
            category = Category(user_id=user.id, name=name)
            db.add(category)
            by_name[name.lower()] = category
        selected.append(category)
    await db.flush()
    wanted = {category.id: category.name for category in selected}

    assigned = set(
        (
            await db.execute(
                select(AccountCategory.category_id)
                .join(Category, Category.id == AccountCategory.category_id)
                .where(AccountCategory.account_id == account.id, Category.user_id == user.id)
            )
        ).scalars().all()
    )

    stale = assigned - wanted.keys()
    if stale:
        await db.execute(
            delete(AccountCategory).where(
                AccountCategory.account_id == account.id,
                AccountCategory.category_id.in_(stale),
            )
        )
    missing = wanted.keys() - assigned
    for category_id in missing:
        db.add(AccountCategory(account_id=account.id, category_id=category_id))
    await db.flush()

    if stale or missing:
        logger.info(
            "Categories of account %s for user %s: +%d -%d",
            account.id, user.id, len(missing), len(stale),
        )
    return sorted(wanted.values(), key=str.lower)


async def get_for_account(db: AsyncSession, user: User, account: Account) -> list[str]:
    result = await db.execute(
        select(Category.name)
        .join(AccountCategory, AccountCategory.category_id == Category.id)
        .where(AccountCategory.account_id == account.id, Category.user_id == user.id)
        .order_by(Category.name)
    )
    return list(result.scalars().all())


async def get_for_user_accounts(
    db: AsyncSession, user: User, account: Account
) -> dict[uuid.UUID, list[str]]:
    """The user's categories of every account mentioned in ``account``'s media."""
    mentioned = (
        select(MediaAccount.account_id)
        .join(Media, Media.id == MediaAccount.media_id)
        .where(Media.account_id == account.id)
    )
    result = await db.execute(
        select(AccountCategory.account_id, Category.name)
        .join(Category, Category.id == AccountCategory.category_id)
        .where(
            Category.user_id == user.id,
            AccountCategory.account_id.in_(mentioned),
        )
        .order_by(AccountCategory.account_id, Category.name)
    )
    categories: dict[uuid.UUID, list[str]] = {}
    for account_id, name in result.all():
        categories.setdefault(account_id, []).append(name)
    return categories
