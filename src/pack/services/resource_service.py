"""
Resource service: business rules for resources and their attachments.

The service owns the transaction boundary. Repositories only add/flush; `save`
and `delete` commit once at the end, and roll everything back if any step fails,
so a resource is never stored without all of its attachments.
"""
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Protocol, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from pack.exceptions.base import (
    AttachmentStorageError,
    FileSizeLimitExceededError,
    InvalidInputError,
    ResourceNotFoundError,
)
from pack.mappers import attachment_mapper, resource_mapper
from pack.models.attachment import Attachment
from pack.models.resource import Resource
from pack.repositories.attachment_repository import AttachmentRepository
from pack.repositories.resource_repository import ResourceRepository
from pack.schemas.resource import AttachmentMetadataView, ResourceForm, ResourceView
from pack.utils.files import DEFAULT_CONTENT_TYPE, sanitize_file_name
from pack.validators.config_validators import format_size_in_mb

logger = logging.getLogger(__name__)


class UploadedFile(Protocol):
    """The parts of starlette's UploadFile the service relies on."""
    filename: str | None
    size: int | None

    @property
    def content_type(self) -> str | None: ...

    async def read(self, size: int = -1) -> bytes: ...


@dataclass(frozen=True)
class UploadLimits:
    """Per-file size limit, in bytes, for attachment uploads."""
    max_file_size: int

    @property
    def max_file_size_label(self) -> str:
        return format_size_in_mb(self.max_file_size)


def _is_empty(upload: UploadedFile) -> bool:
    # starlette records the size while parsing; an unknown size is settled after reading
    return upload.size == 0


class ResourceService:
    """
    Validates uploads, persists resources with their attachments and serves reads.

    Collaborators are injected at construction time; the service keeps no state
    between calls.
    """

    def __init__(
        self,
        db: AsyncSession,
        resources: ResourceRepository,
        attachments: AttachmentRepository,
        limits: UploadLimits,
    ):
        self.db = db
        self.resources = resources
        self.attachments = attachments
        self.limits = limits

    @asynccontextmanager
    async def _transaction(self):
        """
        Commit on success, roll back on any failure and re-raise.
        """
        try:
            yield
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    # =================================================================================================================
    # Writes
    # =================================================================================================================

    async def save(self, form: ResourceForm, files: Sequence[UploadedFile] | None) -> ResourceView:
        """
        Create a resource and its attachments atomically.

        Raises:
            InvalidInputError: no files, or only empty ones.
            FileSizeLimitExceededError: a file is larger than the configured limit.
            AttachmentStorageError: the bytes of a file could not be read.
            RepositoryError: the database rejected the write.
        """
        if not files or all(_is_empty(f) for f in files):
            logger.info("resource.save.no_files", extra={"files_received": len(files or [])})
            raise InvalidInputError("At least one file must be provided.")

        async with self._transaction():
            resource = resource_mapper.to_entity(form)

            for upload in files:
                if _is_empty(upload):
                    continue
                attachment = await self._build_attachment(upload)
                if attachment is not None:
                    resource.add_attachment(attachment)

            if not resource.attachments:
                raise InvalidInputError("At least one file must be provided.")

            saved = await self.resources.save(resource)

        logger.info(
            "resource.save.success",
            extra={"resource_id": saved.id, "attachment_count": len(saved.attachments)},
        )
        return resource_mapper.to_view(saved)

    async def _build_attachment(self, upload: UploadedFile) -> Attachment | None:
        if upload.size is not None and upload.size > self.limits.max_file_size:
            logger.info(
                "resource.save.file_too_large",
                extra={"file_name": upload.filename, "size": upload.size, "limit": self.limits.max_file_size},
            )
            raise FileSizeLimitExceededError(
                f"File {upload.filename} size exceeds the limit of {self.limits.max_file_size_label}"
            )

        try:
            content = await upload.read()
        except OSError as e:
            logger.error("resource.save.read_failed", extra={"file_name": upload.filename}, exc_info=e)
            raise AttachmentStorageError(
                f"Could not store file {upload.filename}. Please try again!"
            ) from e

        # the declared size may be missing or wrong; the bytes read are authoritative
        if not content:
            return None
        if len(content) > self.limits.max_file_size:
            raise FileSizeLimitExceededError(
                f"File {upload.filename} size exceeds the limit of {self.limits.max_file_size_label}"
            )

        return Attachment(
            file_name=sanitize_file_name(upload.filename),
            file_type=upload.content_type or DEFAULT_CONTENT_TYPE,
            file_size=len(content),
            file_data=content,
        )

    async def delete(self, resource_id: int) -> None:
        """
        Delete a resource and all of its attachments in one transaction.

        Not exposed over HTTP.

        Raises:
            ResourceNotFoundError: if no resource has this id.
        """
        async with self._transaction():
            await self.resources.delete_cascade(resource_id)

        logger.info("resource.delete.success", extra={"resource_id": resource_id})

    # =================================================================================================================
    # Reads
    # =================================================================================================================

    async def list_all(self) -> list[ResourceView]:
        return resource_mapper.to_view_list(await self.resources.get_all())

    async def find_by_id(self, resource_id: int) -> Resource:
        """
        Raises:
            ResourceNotFoundError: if no resource has this id.
        """
        return await self.resources.get_by_id_or_raise(resource_id)

    async def get_attachment_file(self, attachment_id: int) -> Attachment:
        """
        Return an attachment with its bytes loaded.

        An attachment without data is reported exactly like a missing one.

        Raises:
            ResourceNotFoundError
        """
        attachment = await self.attachments.get_with_data(attachment_id)
        if attachment is None:
            raise ResourceNotFoundError(f"Attachment with id {attachment_id} not found.")
        if not attachment.file_data:
            logger.warning("resource.attachment.no_data", extra={"attachment_id": attachment_id})
            raise ResourceNotFoundError(
                f"Attachment with id {attachment_id} is incomplete or has no data."
            )
        return attachment

    async def get_attachments_metadata(self, resource_id: int) -> list[AttachmentMetadataView]:
        """
        Raises:
            ResourceNotFoundError: if no resource has this id.
        """
        resource = await self.find_by_id(resource_id)
        return attachment_mapper.to_metadata_view_list(resource.attachments)
