# pack/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py      # App-level errors (AppError and its subclasses, error envelope)
# │   └── mapper.py    # Map SQLAlchemy errors to RepositoryError (db_error_handler)

from .base import (
    GENERIC_ERROR_MESSAGE,
    AppError,
    error_payload,
    InvalidInputError,
    ValidationFailedError,
    ResourceNotFoundError,
    FileSizeLimitExceededError,
    UploadSizeExceededError,
    AttachmentStorageError,
    RepositoryError,
)

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "AppError",
    "error_payload",
    "InvalidInputError",
    "ValidationFailedError",
    "ResourceNotFoundError",
    "FileSizeLimitExceededError",
    "UploadSizeExceededError",
    "AttachmentStorageError",
    "RepositoryError",
]
