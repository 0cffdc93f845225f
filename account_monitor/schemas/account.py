"""Account request/response schemas."""
import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

from account_monitor.schemas.stats import DiffRecord, StatsPoint


class AccountResponse(BaseModel):
    id: uuid.UUID
    username: str
    name: str | None = None
    disabled: bool
    monitoring: bool
    is_valid: bool
    invalidation_count: int
    next_stats_update: datetime | None = None

    model_config = {"from_attributes": True}


class AccountSettingsUpdate(BaseModel):
    name: str | None = Field(None, max_length=200)
    disabled: bool | None = None
    monitoring: bool | None = None
    is_valid: bool | None = None


class NoteUpdate(BaseModel):
    note: str = Field("", max_length=10_000)


class NoteResponse(BaseModel):
    account_id: uuid.UUID
    user_id: uuid.UUID
    note: str

    model_config = {"from_attributes": True}


class CategoriesUpdate(BaseModel):
    account_tags: list[Annotated[str, Field(max_length=100)]] = Field(default_factory=list, max_length=100)


class Dashboard(BaseModel):
    """Everything the account dashboard shows; ``None`` diffs mean no data."""

    account: AccountResponse
    daily_changes: DiffRecord | None = None
    last_daily_change: DiffRecord | None = None
    monthly_changes: DiffRecord | None = None
    last_monthly_change: DiffRecord | None = None
    daily_stats: list[StatsPoint] = []
    note: str | None = None
    categories: list[str] = []


class StatsRow(BaseModel):
    id: uuid.UUID
    followed_by: int
    follows: int
    media: int
    er: float
    created_at: datetime

    model_config = {"from_attributes": True}


class MediaTagRow(BaseModel):
    id: uuid.UUID
    name: str
    occurs: int


class MediaAccountRow(BaseModel):
    id: uuid.UUID
    username: str
    occurs: int
    categories: list[str] = []
