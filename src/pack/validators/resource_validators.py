"""
Field validation for the resource upload form.

`validate_resource_form` returns every violation at once instead of stopping at
the first, so the client gets the full list in the error envelope's `details`.
"""
from dataclasses import dataclass
from typing import Iterable

from pydantic import ValidationError

from pack.exceptions.base import ValidationFailedError
from pack.schemas.resource import ResourceForm

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def _size_violation(field: str, value: str | None, max_length: int) -> FieldViolation | None:
    if value is not None and len(value) > max_length:
        return FieldViolation(field, f"size must be between 0 and {max_length}")
    return None


def validate_resource_form(form: ResourceForm) -> list[FieldViolation]:
    """
    Check the constraints of the upload form.

    - title: required, not blank, at most 200 characters
    - description: optional, at most 1000 characters
    """
    violations: list[FieldViolation] = []

    if form.title is None or not form.title.strip():
        violations.append(FieldViolation("title", "must not be blank"))

    for violation in (
        _size_violation("title", form.title, TITLE_MAX_LENGTH),
        _size_violation("description", form.description, DESCRIPTION_MAX_LENGTH),
    ):
        if violation is not None:
            violations.append(violation)

    return violations


def violations_from_pydantic(exc: ValidationError) -> list[FieldViolation]:
    """
    Convert pydantic parsing errors (wrong types, unknown enum members) into violations.
    """
    violations = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "data"
        violations.append(FieldViolation(field, error.get("msg", "invalid value")))
    return violations


def raise_for_violations(violations: Iterable[FieldViolation]) -> None:
    """
    Raise ValidationFailedError carrying "field: message" details if there is any violation.
    """
    details = [str(v) for v in violations]
    if details:
        raise ValidationFailedError(details)
