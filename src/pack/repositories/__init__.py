"""
Repository layer initialization module.

This module exports all repository classes for easy importing throughout the application.

Usage:
    from pack.repositories import ResourceRepository, AttachmentRepository
"""

from .base_repository import BaseRepository
from .resource_repository import ResourceRepository
from .attachment_repository import AttachmentRepository

__all__ = [
    "BaseRepository",
    "ResourceRepository",
    "AttachmentRepository",
]
