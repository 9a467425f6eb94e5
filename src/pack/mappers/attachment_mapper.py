"""
Attachment -> metadata view mapping. The binary payload is never read here.
"""
from pack.models.attachment import Attachment
from pack.schemas.resource import AttachmentMetadataView


def to_metadata_view(attachment: Attachment) -> AttachmentMetadataView:
    return AttachmentMetadataView(
        id=attachment.id,
        file_name=attachment.file_name,
        file_type=attachment.file_type,
        file_size=attachment.file_size,
        uploaded_at=attachment.uploaded_at,
    )


def to_metadata_view_list(attachments: list[Attachment] | None) -> list[AttachmentMetadataView]:
    return [to_metadata_view(attachment) for attachment in attachments or []]
