from sqlalchemy import String, DateTime, ForeignKey, Integer, BigInteger, LargeBinary
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime, timezone
from pack.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .resource import Resource


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Attachment(Base):
    """
    SQLAlchemy model for a binary file bound to exactly one resource.

    `file_data` is deferred: list/metadata queries never pull the bytes, only the
    download path asks for them (see AttachmentRepository.get_with_data).
    """
    __tablename__ = "attachments"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Sanitized original file name
    file_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    # MIME type as sent by the client
    file_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )

    # Always equal to len(file_data)
    file_size: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False
    )

    file_data: Mapped[bytes] = mapped_column(
        LargeBinary,
        nullable=False,
        deferred=True
    )

    # Assigned once at insert; never updated
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False
    )

    # Foreign key reference to the owning resource
    resource_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("resources.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    # Back-reference to the owning resource
    resource: Mapped["Resource"] = relationship(
        "Resource",
        back_populates="attachments"
    )

    def __repr__(self) -> str:
        # Helpful for debugging/logging
        return f"<Attachment(id={self.id!r}, file_name={self.file_name!r}, file_size={self.file_size!r})>"
