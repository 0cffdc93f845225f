"""Media ORM models: posts of an account, their tags and mentioned accounts."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_monitor.models.base import Base, TimestampMixin, UUIDMixin


class Media(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "media"

    account_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    shortcode: Mapped[str] = mapped_column(String(100), nullable=False)
    caption: Mapped[str | None] = mapped_column(Text, nullable=True)
    taken_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    account = relationship("Account", back_populates="media")


class Tag(Base, UUIDMixin):
    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)


class MediaTag(Base, UUIDMixin):
    __tablename__ = "media_tags"
    __table_args__ = (UniqueConstraint("media_id", "tag_id", name="uq_media_tag"),)

    media_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("media.id", ondelete="CASCADE"), nullable=False
    )
    tag_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("tags.id", ondelete="CASCADE"), nullable=False
    )


class MediaAccount(Base, UUIDMixin):
    """An account mentioned in a media item."""

    __tablename__ = "media_accounts"
    __table_args__ = (UniqueConstraint("media_id", "account_id", name="uq_media_account"),)

    media_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("media.id", ondelete="CASCADE"), nullable=False
    )
    account_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
