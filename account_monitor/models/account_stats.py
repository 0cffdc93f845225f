"""Account statistics snapshot ORM model."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_monitor.models.base import Base, UUIDMixin

# Metric columns in report order.
STATS_METRICS = ("followed_by", "follows", "media", "er")


class AccountStats(Base, UUIDMixin):
    """One measurement of an account, captured at ``created_at``."""

    __tablename__ = "account_stats"
    __table_args__ = (
        Index("ix_account_stats_account_created", "account_id", "created_at"),
    )

    account_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    followed_by: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    follows: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    media: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    er: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    account = relationship("Account", back_populates="stats")
