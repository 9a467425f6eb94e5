from . import attachment_mapper, resource_mapper

__all__ = ["attachment_mapper", "resource_mapper"]
