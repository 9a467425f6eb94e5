"""
FastAPI dependency providers: wire session -> repositories -> service -> facade per request.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pack.config.settings import Settings, get_settings
from pack.database.session import get_async_session
from pack.repositories.attachment_repository import AttachmentRepository
from pack.repositories.resource_repository import ResourceRepository
from pack.services.resource_facade import ResourceFacade
from pack.services.resource_service import ResourceService, UploadLimits


def get_resource_service(
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> ResourceService:
    # both repositories share the request's session, so one commit covers both
    return ResourceService(
        db,
        ResourceRepository(db),
        AttachmentRepository(db),
        UploadLimits(max_file_size=settings.MAX_FILE_SIZE),
    )


def get_resource_facade(service: ResourceService = Depends(get_resource_service)) -> ResourceFacade:
    return ResourceFacade(service)
