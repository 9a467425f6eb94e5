r"""
Centralized access to all database models.

Importing this package registers every model with `Base.metadata`, so
`Base.metadata.create_all(...)` (app startup, tests) sees the full schema.

Example:

from pack.models import Resource, Attachment, Role
"""

from .enums import Category, Language, Provider, Role, display_name
from .resource import Resource, ResourceRole
from .attachment import Attachment

__all__ = [
    "Resource",
    "ResourceRole",
    "Attachment",
    "Category",
    "Language",
    "Provider",
    "Role",
    "display_name",
]
