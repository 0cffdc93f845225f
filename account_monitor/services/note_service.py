"""Per-user account notes."""
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from account_monitor.models.account import Account
from account_monitor.models.account_note import AccountNote
from account_monitor.models.user import User


async def get_note(db: AsyncSession, account: Account, user: User) -> AccountNote | None:
    result = await db.execute(
        select(AccountNote).where(
            AccountNote.account_id == account.id,
            AccountNote.user_id == user.id,
        )
    )
    return result.scalar_one_or_none()


async def update_note(db: AsyncSession, account: Account, user: User, text: str) -> AccountNote | None:
    """Replace the user's note on the account; an empty text only removes it."""
    await db.execute(
        delete(AccountNote).where(
            AccountNote.account_id == account.id,
            AccountNote.user_id == user.id,
        )
    )
    text = text.strip()
    if not text:
        return None
    note = AccountNote(account_id=account.id, user_id=user.id, note=text)
    db.add(note)
    await db.flush()
    return note
