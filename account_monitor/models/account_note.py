"""Per-user account note ORM model."""
import uuid

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_monitor.models.base import Base, TimestampMixin, UUIDMixin


class AccountNote(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "account_notes"
    __table_args__ = (UniqueConstraint("account_id", "user_id", name="uq_account_note_user"),)

    account_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    note: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="notes")
    user = relationship("User", back_populates="notes")
