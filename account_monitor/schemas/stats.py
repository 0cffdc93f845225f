"""Statistics diff and series schemas."""
import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from account_monitor.models.account_stats import STATS_METRICS, AccountStats


class StatsValues(BaseModel):
    followed_by: int = 0
    follows: int = 0
    media: int = 0
    er: float = 0.0

    @classmethod
    def from_snapshot(cls, snapshot: AccountStats) -> "StatsValues":
        return cls(**{name: getattr(snapshot, name) for name in STATS_METRICS})

    def minus(self, other: "StatsValues") -> "StatsValues":
        return StatsValues(
            **{name: getattr(self, name) - getattr(other, name) for name in STATS_METRICS}
        )


class DiffRecord(BaseModel):
    """Change of an account's metrics between two snapshots."""

    account_id: uuid.UUID
    granularity: Literal["daily", "monthly"]
    from_snapshot_id: uuid.UUID
    to_snapshot_id: uuid.UUID
    period_start: datetime
    period_end: datetime
    from_values: StatsValues
    to_values: StatsValues
    delta: StatsValues

    @property
    def is_zero(self) -> bool:
        return all(getattr(self.delta, name) == 0 for name in STATS_METRICS)


class StatsPoint(BaseModel):
    id: uuid.UUID
    account_id: uuid.UUID
    followed_by: int
    follows: int
    media: int
    er: float
    created_at: datetime

    model_config = {"from_attributes": True}
