"""Accounts admin API - 11 endpoints."""
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from account_monitor.dependencies import Page, get_current_user, get_db, get_page, require_role
from account_monitor.models.user import User
from account_monitor.repositories import account_repository
from account_monitor.schemas.account import (
    AccountResponse,
    AccountSettingsUpdate,
    CategoriesUpdate,
    MediaAccountRow,
    MediaTagRow,
    NoteResponse,
    NoteUpdate,
    StatsRow,
)
from account_monitor.schemas.common import APIResponse, PaginationMeta
from account_monitor.services import account_service, category_service, export_service, note_service
from account_monitor.utils.helpers import utc_now

router = APIRouter()


def _pagination(page: Page, total: int) -> PaginationMeta:
    return PaginationMeta(
        total=total, page=page.page, per_page=page.per_page,
        has_next=(page.page * page.per_page < total),
    )


# GET /accounts/{id}/dashboard
@router.get("/{account_id}/dashboard", response_model=APIResponse)
async def dashboard(
    account_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    data = await account_service.build_dashboard(db, account, current_user)
    return APIResponse(status="success", data=data.model_dump(mode="json"))


# PUT /accounts/{id}/note
@router.put("/{account_id}/note", response_model=APIResponse)
async def update_note(
    account_id: uuid.UUID,
    body: NoteUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    note = await note_service.update_note(db, account, current_user, body.note)
    return APIResponse(
        status="success",
        data=NoteResponse.model_validate(note).model_dump(mode="json") if note else None,
        message="Note saved" if note else "Note removed",
    )


# GET /accounts/{id}/settings
@router.get("/{account_id}/settings", response_model=APIResponse)
async def get_settings(
    account_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    return APIResponse(status="success", data=AccountResponse.model_validate(account).model_dump(mode="json"))


# PUT /accounts/{id}/settings (admin, manager)
@router.put("/{account_id}/settings", response_model=APIResponse)
async def update_settings(
    account_id: uuid.UUID,
    body: AccountSettingsUpdate,
    _caller: User = require_role("admin", "manager"),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    account = await account_service.update_settings(db, account, body)
    return APIResponse(
        status="success",
        data=AccountResponse.model_validate(account).model_dump(mode="json"),
        message="Settings updated",
    )


# DELETE /accounts/{id}/stats (admin)
@router.delete("/{account_id}/stats", response_model=APIResponse)
async def delete_stats(
    account_id: uuid.UUID,
    _caller: User = require_role("admin"),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    deleted = await account_service.delete_stats(db, account.id)
    return APIResponse(status="success", data={"deleted": deleted}, message="Stats deleted")


# DELETE /accounts/{id}/media (admin)
@router.delete("/{account_id}/media", response_model=APIResponse)
async def delete_associated(
    account_id: uuid.UUID,
    _caller: User = require_role("admin"),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    deleted = await account_service.delete_associated(db, account.id)
    return APIResponse(status="success", data={"deleted": deleted}, message="Associated media deleted")


# DELETE /accounts/{id} (admin)
@router.delete("/{account_id}", response_model=APIResponse)
async def delete_account(
    account_id: uuid.UUID,
    _caller: User = require_role("admin"),
    db: AsyncSession = Depends(get_db),
):
    await account_service.delete_account(db, account_id)
    return APIResponse(status="success", message="Account deleted")


# PUT /accounts/{id}/categories
@router.put("/{account_id}/categories", response_model=APIResponse)
async def save_categories(
    account_id: uuid.UUID,
    body: CategoriesUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    names = await category_service.save_for_account(db, account, body.account_tags, current_user)
    return APIResponse(status="success", data=names, message="Categories saved")


# GET /accounts/{id}/stats[?export=1]
@router.get("/{account_id}/stats")
async def list_stats(
    account_id: uuid.UUID,
    export: bool = False,
    page: Page = Depends(get_page),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    if export:
        rows, _ = await account_repository.list_stats(db, account.id, limit=None)
        return export_service.csv_response(rows, "stats", account.username, utc_now().date())

    rows, total = await account_repository.list_stats(db, account.id, skip=page.skip, limit=page.per_page)
    return APIResponse(
        status="success",
        data=[StatsRow.model_validate(r).model_dump(mode="json") for r in rows],
        pagination=_pagination(page, total),
    )


# GET /accounts/{id}/media-tags[?export=1]
@router.get("/{account_id}/media-tags")
async def media_tags(
    account_id: uuid.UUID,
    export: bool = False,
    page: Page = Depends(get_page),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    if export:
        rows, _ = await account_repository.media_tag_counts(db, account.id, limit=None)
        return export_service.csv_response(rows, "media-tags", account.username, utc_now().date())

    rows, total = await account_repository.media_tag_counts(db, account.id, skip=page.skip, limit=page.per_page)
    return APIResponse(
        status="success",
        data=[MediaTagRow(**r).model_dump(mode="json") for r in rows],
        pagination=_pagination(page, total),
    )


# GET /accounts/{id}/media-accounts[?export=1]
@router.get("/{account_id}/media-accounts")
async def media_accounts(
    account_id: uuid.UUID,
    export: bool = False,
    page: Page = Depends(get_page),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    account = await account_service.find_account(db, account_id)
    if export:
        rows, _ = await account_repository.media_account_counts(db, account.id, limit=None)
        return export_service.csv_response(rows, "media-accounts", account.username, utc_now().date())

    rows, total = await account_repository.media_account_counts(db, account.id, skip=page.skip, limit=page.per_page)
    categories = await category_service.get_for_user_accounts(db, current_user, account)
    return APIResponse(
        status="success",
        data=[
            MediaAccountRow(**r, categories=categories.get(r["id"], [])).model_dump(mode="json")
            for r in rows
        ],
        pagination=_pagination(page, total),
    )
