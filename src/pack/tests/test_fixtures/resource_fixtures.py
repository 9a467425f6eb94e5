"""Fixtures for repository, service and facade tests."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from pack.models.enums import Category, Language, Provider, Role
from pack.repositories.attachment_repository import AttachmentRepository
from pack.repositories.resource_repository import ResourceRepository
from pack.schemas.resource import ResourceForm
from pack.services.resource_facade import ResourceFacade
from pack.services.resource_service import ResourceService, UploadLimits

# NOTE: every fixture here depends on `db_session` from conftest.py

MAX_FILE_SIZE = 1024


class FakeUpload:
    """
    Stand-in for starlette's UploadFile. `fail_with` makes `read()` raise.
    """

    def __init__(self, filename, content: bytes, content_type="application/pdf", size=None, fail_with=None):
        self.filename = filename
        self._content = content
        self.content_type = content_type
        self.size = len(content) if size is None else size
        self.fail_with = fail_with

    async def read(self, size: int = -1) -> bytes:
        if self.fail_with is not None:
            raise self.fail_with
        return self._content


@pytest.fixture
def make_upload():
    """
    Factory for fake uploads:
        upload = make_upload("a.pdf", b"%PDF-1.4")
    """
    def _make(filename="guide.pdf", content=b"%PDF-1.4 guide", **kwargs) -> FakeUpload:
        return FakeUpload(filename, content, **kwargs)

    return _make


@pytest.fixture
def resource_form() -> ResourceForm:
    return ResourceForm(
        title="Leading teams",
        description="A short guide to leading distributed teams",
        category=Category.LEADERSHIP,
        language=Language.EN,
        provider=Provider.PACK,
        roles={Role.MENTOR_COACH},
    )


@pytest.fixture
def resource_repository(db_session: AsyncSession) -> ResourceRepository:
    return ResourceRepository(db_session)


@pytest.fixture
def attachment_repository(db_session: AsyncSession) -> AttachmentRepository:
    return AttachmentRepository(db_session)


@pytest.fixture
def resource_service(db_session, resource_repository, attachment_repository) -> ResourceService:
    return ResourceService(
        db_session,
        resource_repository,
        attachment_repository,
        UploadLimits(max_file_size=MAX_FILE_SIZE),
    )


@pytest.fixture
def resource_facade(resource_service: ResourceService) -> ResourceFacade:
    return ResourceFacade(resource_service)
