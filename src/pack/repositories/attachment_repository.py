"""
Attachment repository.

Plain reads leave the `file_data` column deferred; `get_with_data` is the one
query that loads the bytes.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import undefer
import logging

from pack.exceptions.base import RepositoryError
from pack.models.attachment import Attachment
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AttachmentRepository(BaseRepository[Attachment]):
    """
    Repository for Attachment entity operations.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Attachment, db)

    async def get_with_data(self, attachment_id: int) -> Attachment | None:
        """
        Get an attachment by id with its binary payload loaded.

        Returns:
            The attachment, or None if it does not exist.
        """
        try:
            result = await self.db.execute(
                self._select()
                .options(undefer(Attachment.file_data))
                .where(Attachment.id == attachment_id)
            )
            attachment = result.scalar_one_or_none()

            logger.debug(f"Retrieved Attachment with data by ID: {attachment_id} (found={attachment is not None})")

            return attachment

        except Exception as e:
            logger.error(f"Error retrieving Attachment {attachment_id} with data: {e}")
            raise RepositoryError("Failed to retrieve Attachment") from e
