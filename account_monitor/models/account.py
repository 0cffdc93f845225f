"""Monitored account ORM model."""
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_monitor.models.base import Base, TimestampMixin, UUIDMixin


class Account(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    disabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    monitoring: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_valid: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    invalidation_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # Read by the collection scheduler; NULL means "collect as soon as possible".
    next_stats_update: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    stats = relationship("AccountStats", back_populates="account", lazy="noload", passive_deletes=True)
    media = relationship("Media", back_populates="account", lazy="noload", passive_deletes=True)
    notes = relationship("AccountNote", back_populates="account", lazy="noload", passive_deletes=True)
