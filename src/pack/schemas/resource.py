"""
Transport schemas (pydantic) for resources and attachments.

JSON field names are camelCase (attachmentCount, fileName, ...); snake_case is
accepted on input as well. Length/blank rules for the form are checked by
pack.validators.resource_validators, not here, so every violation is reported
together in one "field: message" list.
"""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pack.models.enums import Category, Language, Provider, Role


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ResourceForm(CamelModel):
    """The `data` part of a resource upload."""
    title: str | None = None
    description: str | None = None
    category: Category | None = None
    language: Language | None = None
    provider: Provider | None = None
    roles: set[Role] | None = Field(default_factory=set)


class ResourceView(CamelModel):
    """A resource as returned by the API."""
    id: int
    title: str
    description: str | None = None
    category: Category | None = None
    language: Language | None = None
    provider: Provider | None = None
    roles: list[Role] = Field(default_factory=list)
    attachment_count: int = 0


class AttachmentMetadataView(CamelModel):
    """Attachment metadata only: the binary payload is never part of this view."""
    id: int
    file_name: str
    file_type: str
    file_size: int
    uploaded_at: datetime
