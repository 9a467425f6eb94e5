"""
Facade exposing the narrow API the HTTP layer needs from the resource service.
"""
from typing import Sequence

from pack.mappers import resource_mapper
from pack.models.attachment import Attachment
from pack.schemas.resource import AttachmentMetadataView, ResourceForm, ResourceView
from .resource_service import ResourceService, UploadedFile


class ResourceFacade:
    def __init__(self, service: ResourceService):
        self.service = service

    async def save(self, form: ResourceForm, files: Sequence[UploadedFile] | None) -> ResourceView:
        return await self.service.save(form, files)

    async def list_all(self) -> list[ResourceView]:
        return await self.service.list_all()

    async def find_by_id_and_convert_to_view(self, resource_id: int) -> ResourceView:
        return resource_mapper.to_view(await self.service.find_by_id(resource_id))

    async def get_attachment_file(self, attachment_id: int) -> Attachment:
        return await self.service.get_attachment_file(attachment_id)

    async def get_attachments_metadata(self, resource_id: int) -> list[AttachmentMetadataView]:
        return await self.service.get_attachments_metadata(resource_id)
