"""
Resource repository: Resource-specific queries on top of BaseRepository.

Every read eagerly loads the attachment collection (without the deferred
`file_data` bytes) so the entity -> view mapping can count attachments and list
their metadata without triggering lazy loads in async code.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select
import logging

from pack.models.resource import Resource
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ResourceRepository(BaseRepository[Resource]):
    """
    Repository for Resource entity operations.

    Role tags are loaded by the relationship itself (lazy="selectin"); attachments
    are loaded here, explicitly, on every read.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Resource, db)  # Binds the base repository to the Resource model

    def _select(self) -> Select:
        return super()._select().options(selectinload(Resource.attachments))

    async def delete_cascade(self, resource_id: int) -> None:
        """
        Delete a resource together with its attachments and role tags.

        Two steps: fetch the resource with its children loaded, then let the ORM
        cascade the delete inside the caller's transaction.

        Raises:
            ResourceNotFoundError: if no resource has this id.
        """
        resource = await self.get_by_id_or_raise(resource_id)
        attachment_count = len(resource.attachments)

        await self.delete(resource)

        logger.info(
            "repo.resource.delete_cascade",
            extra={"id": resource_id, "attachments_deleted": attachment_count},
        )
