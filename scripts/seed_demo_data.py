"""Seed a development database with an admin user and a demo account.

Usage (from the project root):
    python scripts/seed_demo_data.py

Creates the tables when missing, an admin@monitor.local user, and a
"demo_account" with 400 days of daily statistics, then prints a bearer token
for the admin so the API can be explored from /docs.
"""
import asyncio
import random
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from account_monitor.database import async_session_factory, engine
from account_monitor.models import Account, AccountStats, Base, User, UserRole
from account_monitor.services.auth_service import create_access_token
from account_monitor.utils.helpers import utc_now

_DEMO_USERNAME = "demo_account"
_DAYS = 400


async def seed(session: AsyncSession) -> None:
    # ── 1. Admin user (idempotent) ──────────────────────────────────────────
    result = await session.execute(select(User).where(User.email == "admin@monitor.local"))
    admin: User | None = result.scalars().first()
    if admin is None:
        admin = User(email="admin@monitor.local", name="Admin", role=UserRole.ADMIN)
        session.add(admin)
        await session.flush()
        print(f"Created admin user (id={admin.id})")

    # ── 2. Demo account with daily stats (idempotent) ───────────────────────
    result = await session.execute(select(Account).where(Account.username == _DEMO_USERNAME))
    account: Account | None = result.scalars().first()
    if account is None:
        account = Account(username=_DEMO_USERNAME, name="Demo Account")
        session.add(account)
        await session.flush()

        now = utc_now().replace(minute=0, second=0, microsecond=0)
        followers, following, media = 1_000, 300, 50
        for days_back in range(_DAYS, -1, -1):
            followers += random.randint(-5, 25)
            following += random.randint(-1, 2)
            media += random.choice((0, 0, 1))
            session.add(AccountStats(
                account_id=account.id,
                followed_by=followers,
                follows=following,
                media=media,
                er=round(random.uniform(1.0, 4.0), 2),
                created_at=now - timedelta(days=days_back),
            ))
        print(f"Created {_DEMO_USERNAME} with {_DAYS + 1} snapshots (id={account.id})")
    else:
        print(f"Account already exists: {_DEMO_USERNAME} (id={account.id})")

    await session.commit()
    token = create_access_token(str(admin.id), admin.role.value, expires_minutes=24 * 60)
    print(f"\nAdmin bearer token (24h):\n{token}")


async def main() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with async_session_factory() as session:
        await seed(session)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
