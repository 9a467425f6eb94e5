"""
Resource <-> transport mapping.

All functions here are pure: they only read attributes that the repositories
have already loaded and never touch the session.
"""
from pack.models.enums import Role
from pack.models.resource import Resource
from pack.schemas.resource import ResourceForm, ResourceView


def to_entity(form: ResourceForm) -> Resource:
    """
    Build a new, transient Resource from the upload form.

    Both collections are initialised explicitly so the flushed entity never needs
    to lazy-load them.
    """
    resource = Resource(
        title=form.title.strip() if form.title else form.title,
        description=form.description,
        category=form.category,
        language=form.language,
        provider=form.provider,
    )
    resource.roles = form.roles or set()
    resource.attachments = []
    return resource


def attachment_count(resource: Resource) -> int:
    attachments = resource.attachments
    return len(attachments) if attachments is not None else 0


def to_view(resource: Resource) -> ResourceView:
    return ResourceView(
        id=resource.id,
        title=resource.title,
        description=resource.description,
        category=resource.category,
        language=resource.language,
        provider=resource.provider,
        roles=sorted(resource.roles, key=lambda role: list(Role).index(role)),
        attachment_count=attachment_count(resource),
    )


def to_view_list(resources: list[Resource]) -> list[ResourceView]:
    return [to_view(resource) for resource in resources]
