"""Image DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``).

Validation rules:

- ``url``: required, valid http(s) URL.
- ``secure_url``: required, valid http(s) URL.
- ``public_id``: required, non-blank string.
- ``media_service_id``: required, valid UUID.
- ``owner_id``: required, valid UUID.
- ``owner_ids``: required, non-empty list of valid UUIDs.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Type, TypeVar, Union
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)

_HTTP_URL = TypeAdapter(HttpUrl)

D = TypeVar("D", bound="ImageRequestDTO")


class ImageRequestDTO(BaseModel):
    """Common behaviour of every image request."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def validate_request(cls: Type[D], payload: Union[BaseModel, Mapping[str, Any]]) -> D:
        """Validate ``payload`` (a raw mapping or an existing DTO).

        Raises ``pydantic.ValidationError`` describing every invalid field.
        """
        if isinstance(payload, BaseModel):
            payload = payload.model_dump()
        return cls.model_validate(payload)


class _ImageFieldsDTO(ImageRequestDTO):
    url: str
    secure_url: str
    public_id: str
    media_service_id: UUID

    @field_validator("url", "secure_url")
    @classmethod
    def must_be_http_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("URL must not be empty.")
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError:
            raise ValueError(f"'{v}' is not a valid http(s) URL.") from None
        return v

    @field_validator("public_id")
    @classmethod
    def public_id_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Public ID must not be empty.")
        return v.strip()


def _unique_owner_ids(v: List[UUID]) -> List[UUID]:
    if not v:
        raise ValueError("At least one owner ID is required.")
    return list(dict.fromkeys(v))


# ---------------------------------------------------------------------------
# Single owner
# ---------------------------------------------------------------------------


class AddImageDTO(_ImageFieldsDTO):
    """Attach one image to one owner."""

    owner_id: UUID


class DeleteImageDTO(ImageRequestDTO):
    """Detach one image from one owner."""

    media_service_id: UUID
    owner_id: UUID


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------


class AddImageBatchDTO(_ImageFieldsDTO):
    """Attach one image to many owners.

    Duplicate owner IDs are collapsed, keeping the first occurrence.
    """

    owner_ids: List[UUID]

    @field_validator("owner_ids")
    @classmethod
    def owner_ids_not_empty(cls, v: List[UUID]) -> List[UUID]:
        return _unique_owner_ids(v)


class DeleteImageBatchDTO(ImageRequestDTO):
    """Detach one image from many owners."""

    media_service_id: UUID
    owner_ids: List[UUID]

    @field_validator("owner_ids")
    @classmethod
    def owner_ids_not_empty(cls, v: List[UUID]) -> List[UUID]:
        return _unique_owner_ids(v)
