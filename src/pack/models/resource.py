from sqlalchemy import String, ForeignKey, Integer
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from pack.database.base import Base
from .enums import Category, Language, Provider, Role
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .attachment import Attachment


class Resource(Base):
    """
    SQLAlchemy model for a catalogued learning/mentoring resource.

    A resource owns its attachments: they are saved together with it and deleted
    with it (cascade + orphan removal). Role tags live in the `resource_roles`
    join table and are always loaded alongside the resource.
    """
    __tablename__ = "resources"

    # Unique identifier for the resource (primary key)
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(200),
        nullable=False
    )

    description: Mapped[str | None] = mapped_column(
        String(1000),
        nullable=True
    )

    # Enum columns are stored by member name
    category: Mapped[Category | None] = mapped_column(
        SQLEnum(Category, name="resource_category"),
        nullable=True
    )

    language: Mapped[Language | None] = mapped_column(
        SQLEnum(Language, name="resource_language"),
        nullable=True
    )

    provider: Mapped[Provider | None] = mapped_column(
        SQLEnum(Provider, name="resource_provider"),
        nullable=True
    )

    # --- Relationships ---

    # One-to-Many: role tags (join table rows), loaded eagerly with every resource
    role_entries: Mapped[list["ResourceRole"]] = relationship(
        "ResourceRole",
        back_populates="resource",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    # One-to-Many: a resource owns its attachments.
    # Loaded explicitly by the repositories (selectinload) - never implicitly in async code.
    attachments: Mapped[list["Attachment"]] = relationship(
        "Attachment",
        back_populates="resource",
        cascade="all, delete-orphan",
        order_by="Attachment.id",
        lazy="select"
    )

    @property
    def roles(self) -> set[Role]:
        return {entry.role for entry in self.role_entries}

    @roles.setter
    def roles(self, roles) -> None:
        # set semantics: unordered, one row per distinct role
        self.role_entries = [ResourceRole(role=role) for role in sorted(set(roles or ()), key=lambda r: r.value)]

    def add_attachment(self, attachment: "Attachment") -> None:
        self.attachments.append(attachment)
        attachment.resource = self

    def remove_attachment(self, attachment: "Attachment") -> None:
        # delete-orphan: the detached attachment is deleted on the next flush
        self.attachments.remove(attachment)

    def __repr__(self) -> str:
        # Helpful for debugging/logging
        return f"<Resource(id={self.id!r}, title={self.title!r})>"


class ResourceRole(Base):
    """
    Join-table row holding one role tag of a resource.
    """
    __tablename__ = "resource_roles"

    resource_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("resources.id", ondelete="CASCADE"),
        primary_key=True
    )

    role: Mapped[Role] = mapped_column(
        SQLEnum(Role, name="resource_role"),
        primary_key=True
    )

    resource: Mapped["Resource"] = relationship(
        "Resource",
        back_populates="role_entries"
    )

    def __repr__(self) -> str:
        return f"<ResourceRole(resource_id={self.resource_id!r}, role={self.role.value!r})>"
