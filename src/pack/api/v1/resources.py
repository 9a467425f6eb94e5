"""
HTTP endpoints for resources and their attachments.

Multipart uploads carry two kinds of parts:
  - `data`: the resource form as JSON. Browsers usually send it as a Blob, so it
    may arrive as a file part rather than a plain field; both are accepted.
  - `files`: one part per attachment.
"""
from dataclasses import dataclass
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError
from starlette.datastructures import FormData, UploadFile
from starlette.types import Message

from pack.config.settings import Settings, get_settings
from pack.core.dependencies import get_resource_facade
from pack.exceptions.base import InvalidInputError, UploadSizeExceededError
from pack.models.attachment import Attachment
from pack.schemas.resource import AttachmentMetadataView, ResourceForm, ResourceView
from pack.services.resource_facade import ResourceFacade
from pack.utils.files import content_disposition
from pack.validators.resource_validators import (
    raise_for_violations,
    validate_resource_form,
    violations_from_pydantic,
)

router = APIRouter()


@dataclass
class ResourceUpload:
    form: ResourceForm
    files: list[UploadFile]


def _upload_size_exceeded(settings: Settings) -> UploadSizeExceededError:
    return UploadSizeExceededError(
        f"Maximum upload size exceeded. Limit is {settings.max_request_size_label}."
    )


def _limit_request_body(request: Request, settings: Settings) -> Request:
    """
    Return a view of `request` whose body stops at MAX_REQUEST_SIZE.

    A declared Content-Length over the limit fails immediately. Otherwise the
    received bytes are counted as they arrive, which also covers chunked bodies.
    """
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > settings.MAX_REQUEST_SIZE:
        raise _upload_size_exceeded(settings)

    received = 0

    async def receive() -> Message:
        nonlocal received
        message = await request.receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > settings.MAX_REQUEST_SIZE:
                raise _upload_size_exceeded(settings)
        return message

    return Request(request.scope, receive)


async def _read_upload(form_data: FormData) -> ResourceUpload:
    raw = form_data.get("data")
    if raw is None:
        raise InvalidInputError("Required part 'data' is not present.")
    if isinstance(raw, UploadFile):
        raw = await raw.read()

    try:
        form = ResourceForm.model_validate_json(raw)
    except ValidationError as e:
        raise_for_violations(violations_from_pydantic(e))
        raise

    raise_for_violations(validate_resource_form(form))

    files = [part for part in form_data.getlist("files") if isinstance(part, UploadFile)]
    return ResourceUpload(form=form, files=files)


async def parse_resource_upload(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[ResourceUpload]:
    """
    Read the multipart body, then parse and validate the `data` part.

    The parsed form is closed once the request has been handled, which releases
    the temporary files Starlette spools large parts into.

    Raises:
        UploadSizeExceededError: the body is larger than MAX_REQUEST_SIZE.
        InvalidInputError: the `data` part is missing.
        ValidationFailedError: the `data` part is malformed or violates field rules.
    """
    form_data = await _limit_request_body(request, settings).form()
    try:
        yield await _read_upload(form_data)
    finally:
        await form_data.close()


def _file_response(attachment: Attachment, disposition: str) -> Response:
    # the stored type is sent as-is; media_type would append a charset to text/*
    return Response(
        content=attachment.file_data,
        headers={
            "Content-Type": attachment.file_type,
            "Content-Disposition": content_disposition(disposition, attachment.file_name),
        },
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ResourceView)
async def create_resource(
    response: Response,
    upload: ResourceUpload = Depends(parse_resource_upload),
    facade: ResourceFacade = Depends(get_resource_facade),
    settings: Settings = Depends(get_settings),
):
    resource = await facade.save(upload.form, upload.files)
    response.headers["Location"] = f"{settings.API_V1_PREFIX}/resources/{resource.id}"
    return resource


@router.get("", response_model=list[ResourceView])
async def list_resources(facade: ResourceFacade = Depends(get_resource_facade)):
    return await facade.list_all()


@router.get("/attachments/{attachment_id}/download")
async def download_attachment(attachment_id: int, facade: ResourceFacade = Depends(get_resource_facade)):
    attachment = await facade.get_attachment_file(attachment_id)
    return _file_response(attachment, "attachment")


@router.get("/attachments/{attachment_id}/view")
async def view_attachment(attachment_id: int, facade: ResourceFacade = Depends(get_resource_facade)):
    attachment = await facade.get_attachment_file(attachment_id)
    return _file_response(attachment, "inline")


@router.get("/{resource_id}", response_model=ResourceView)
async def get_resource(resource_id: int, facade: ResourceFacade = Depends(get_resource_facade)):
    return await facade.find_by_id_and_convert_to_view(resource_id)


@router.get("/{resource_id}/attachments", response_model=list[AttachmentMetadataView])
async def list_resource_attachments(resource_id: int, facade: ResourceFacade = Depends(get_resource_facade)):
    return await facade.get_attachments_metadata(resource_id)
