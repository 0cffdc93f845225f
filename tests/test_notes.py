"""Tests for per-user account notes."""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from account_monitor.models import AccountNote, UserRole
from account_monitor.services import note_service
from tests.conftest import _create_account, _create_test_user


pytestmark = pytest.mark.anyio


async def _note_count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(AccountNote))).scalar()


async def test_update_note_replaces_previous(db_session: AsyncSession):
    user, _ = await _create_test_user(db_session)
    account = await _create_account(db_session)

    await note_service.update_note(db_session, account, user, "first")
    await note_service.update_note(db_session, account, user, "  second  ")
    await db_session.commit()

    note = await note_service.get_note(db_session, account, user)
    assert note.note == "second"
    assert await _note_count(db_session) == 1


async def test_blank_note_removes_it(db_session: AsyncSession):
    user, _ = await _create_test_user(db_session)
    account = await _create_account(db_session)
    await note_service.update_note(db_session, account, user, "keep an eye on this one")

    assert await note_service.update_note(db_session, account, user, "   ") is None
    await db_session.commit()
    assert await note_service.get_note(db_session, account, user) is None


async def test_notes_are_per_user(db_session: AsyncSession):
    alice, _ = await _create_test_user(db_session)
    bob, _ = await _create_test_user(db_session, UserRole.VIEWER)
    account = await _create_account(db_session)

    await note_service.update_note(db_session, account, alice, "alice's")
    await note_service.update_note(db_session, account, bob, "bob's")
    await note_service.update_note(db_session, account, alice, "")
    await db_session.commit()

    assert await note_service.get_note(db_session, account, alice) is None
    assert (await note_service.get_note(db_session, account, bob)).note == "bob's"
