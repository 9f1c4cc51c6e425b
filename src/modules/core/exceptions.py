"""API exceptions shared by every module.

Domain exceptions stay framework-agnostic inside each module; views
translate them into these DRF exceptions so drf-standardized-errors
renders them with a stable ``code``.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.settings import api_settings


class Conflict(APIException):
    """The request conflicts with the current state of the resource."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state of the resource."
    default_code = "conflict"


class BadRequest(APIException):
    """A well-formed request the current state cannot satisfy (e.g. empty cart)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "The request cannot be processed."
    default_code = "bad_request"


def validation_error_from_pydantic(
    exc: PydanticValidationError, field_names: Optional[Dict[str, str]] = None
) -> ValidationError:
    """Translate a DTO validation failure into a field-keyed DRF error.

    ``field_names`` maps DTO attribute names to their wire names so the
    rendered ``attr`` matches what the client sent.
    """
    field_names = field_names or {}
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        path = [field_names.get(str(part), str(part)) for part in error["loc"]]
        key = ".".join(path) or api_settings.NON_FIELD_ERRORS_KEY
        message = error["msg"].removeprefix("Value error, ")
        errors.setdefault(key, []).append(message)
    return ValidationError(errors)
