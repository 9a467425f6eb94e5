from datetime import datetime, timezone

from pack.mappers import attachment_mapper, resource_mapper
from pack.models.attachment import Attachment
from pack.models.enums import Category, Language, Provider, Role
from pack.schemas.resource import ResourceForm


def test_to_entity_copies_fields_and_trims_title():
    form = ResourceForm(
        title="  Managing change  ",
        description="desc",
        category=Category.MANAGING_COMPLEXITY,
        language=Language.IT,
        provider=Provider.SKILLA,
        roles={Role.MENTEE_COACHEE},
    )

    resource = resource_mapper.to_entity(form)

    assert resource.id is None
    assert resource.title == "Managing change"
    assert resource.category is Category.MANAGING_COMPLEXITY
    assert resource.language is Language.IT
    assert resource.provider is Provider.SKILLA
    assert resource.roles == {Role.MENTEE_COACHEE}
    assert resource.attachments == []


def test_to_entity_without_roles():
    resource = resource_mapper.to_entity(ResourceForm(title="t", roles=None))
    assert resource.roles == set()


def test_to_view_counts_attachments_and_orders_roles():
    resource = resource_mapper.to_entity(
        ResourceForm(title="t", roles={Role.MENTEE_COACHEE, Role.MENTOR_COACH})
    )
    resource.id = 3
    resource.add_attachment(Attachment(file_name="a", file_type="x/y", file_size=1, file_data=b"1"))

    view = resource_mapper.to_view(resource)

    assert view.id == 3
    assert view.roles == [Role.MENTOR_COACH, Role.MENTEE_COACHEE]
    assert view.attachment_count == 1
    assert view.model_dump(by_alias=True)["attachmentCount"] == 1


def test_to_view_list_empty():
    assert resource_mapper.to_view_list([]) == []


def test_attachment_metadata_view():
    uploaded = datetime(2024, 5, 1, tzinfo=timezone.utc)
    attachment = Attachment(id=9, file_name="n.pdf", file_type="application/pdf", file_size=4, file_data=b"data")
    attachment.uploaded_at = uploaded

    view = attachment_mapper.to_metadata_view(attachment)

    assert view.model_dump(by_alias=True) == {
        "id": 9,
        "fileName": "n.pdf",
        "fileType": "application/pdf",
        "fileSize": 4,
        "uploadedAt": uploaded,
    }


def test_attachment_metadata_view_list_handles_none():
    assert attachment_mapper.to_metadata_view_list(None) == []
