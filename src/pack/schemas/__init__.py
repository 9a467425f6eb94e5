from .resource import ResourceForm, ResourceView, AttachmentMetadataView

__all__ = ["ResourceForm", "ResourceView", "AttachmentMetadataView"]
