from .resource_service import ResourceService, UploadLimits
from .resource_facade import ResourceFacade

__all__ = ["ResourceService", "UploadLimits", "ResourceFacade"]
