"""Unit tests for image request DTOs (Pydantic v2)."""

from __future__ import annotations

import uuid

import pytest
from pydantic import ValidationError

from modules.images.dtos import (
    AddImageBatchDTO,
    AddImageDTO,
    DeleteImageBatchDTO,
    DeleteImageDTO,
)

pytestmark = pytest.mark.unit

MEDIA_ID = str(uuid.uuid4())
OWNER_ID = str(uuid.uuid4())


def _add_payload(**overrides) -> dict:
    data = {
        "url": "http://media.example.com/a.png",
        "secure_url": "https://media.example.com/a.png",
        "public_id": "catalog/a",
        "media_service_id": MEDIA_ID,
        "owner_id": OWNER_ID,
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# AddImageDTO
# ---------------------------------------------------------------------------


class TestAddImageDTO:
    def test_valid(self):
        dto = AddImageDTO.validate_request(_add_payload())
        assert dto.owner_id == uuid.UUID(OWNER_ID)
        assert dto.media_service_id == uuid.UUID(MEDIA_ID)
        assert dto.url == "http://media.example.com/a.png"

    def test_is_frozen(self):
        dto = AddImageDTO.validate_request(_add_payload())
        with pytest.raises(ValidationError):
            dto.public_id = "other"

    def test_extra_fields_ignored(self):
        dto = AddImageDTO.validate_request(_add_payload(owner_type="seminar"))
        assert not hasattr(dto, "owner_type")

    @pytest.mark.parametrize("field", ["url", "secure_url"])
    @pytest.mark.parametrize("value", ["", "   ", "not a url", "ftp://host/file"])
    def test_invalid_urls(self, field, value):
        with pytest.raises(ValidationError):
            AddImageDTO.validate_request(_add_payload(**{field: value}))

    def test_blank_public_id(self):
        with pytest.raises(ValidationError, match="Public ID"):
            AddImageDTO.validate_request(_add_payload(public_id="  "))

    def test_public_id_is_stripped(self):
        dto = AddImageDTO.validate_request(_add_payload(public_id=" catalog/a "))
        assert dto.public_id == "catalog/a"

    @pytest.mark.parametrize("field", ["media_service_id", "owner_id"])
    def test_invalid_uuid(self, field):
        with pytest.raises(ValidationError):
            AddImageDTO.validate_request(_add_payload(**{field: "123"}))

    @pytest.mark.parametrize(
        "field", ["url", "secure_url", "public_id", "media_service_id", "owner_id"]
    )
    def test_missing_field(self, field):
        payload = _add_payload()
        del payload[field]
        with pytest.raises(ValidationError, match=field):
            AddImageDTO.validate_request(payload)

    def test_revalidates_existing_dto(self):
        dto = AddImageDTO.validate_request(_add_payload())
        again = AddImageDTO.validate_request(dto)
        assert again == dto


# ---------------------------------------------------------------------------
# DeleteImageDTO
# ---------------------------------------------------------------------------


class TestDeleteImageDTO:
    def test_valid(self):
        dto = DeleteImageDTO.validate_request(
            {"media_service_id": MEDIA_ID, "owner_id": OWNER_ID}
        )
        assert dto.media_service_id == uuid.UUID(MEDIA_ID)

    def test_missing_owner_id(self):
        with pytest.raises(ValidationError):
            DeleteImageDTO.validate_request({"media_service_id": MEDIA_ID})


# ---------------------------------------------------------------------------
# Batch DTOs
# ---------------------------------------------------------------------------


class TestBatchDTOs:
    def test_add_batch_valid(self):
        ids = [str(uuid.uuid4()), str(uuid.uuid4())]
        payload = _add_payload(owner_ids=ids)
        del payload["owner_id"]

        dto = AddImageBatchDTO.validate_request(payload)

        assert dto.owner_ids == [uuid.UUID(i) for i in ids]

    def test_add_batch_empty_owner_ids(self):
        with pytest.raises(ValidationError, match="At least one owner ID"):
            AddImageBatchDTO.validate_request(_add_payload(owner_ids=[]))

    def test_duplicates_collapsed_in_order(self):
        a, b = str(uuid.uuid4()), str(uuid.uuid4())
        dto = DeleteImageBatchDTO.validate_request(
            {"media_service_id": MEDIA_ID, "owner_ids": [a, b, a]}
        )
        assert dto.owner_ids == [uuid.UUID(a), uuid.UUID(b)]

    def test_delete_batch_invalid_owner_id(self):
        with pytest.raises(ValidationError):
            DeleteImageBatchDTO.validate_request(
                {"media_service_id": MEDIA_ID, "owner_ids": ["nope"]}
            )

    def test_delete_batch_missing_owner_ids(self):
        with pytest.raises(ValidationError):
            DeleteImageBatchDTO.validate_request({"media_service_id": MEDIA_ID})
