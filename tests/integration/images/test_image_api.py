"""Integration tests for the image API endpoints.

Covers:
- POST /api/v1/images/{owner_type}/ (+ delete/, batch/, batch/delete/).
- Domain exception mapping (400, 404, 500).
- Authentication enforcement (401 without token).
"""

from __future__ import annotations

import uuid
from unittest.mock import patch

import pytest

from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.images.exceptions import ImageOperationFailed
from modules.images.services import ImageService

pytestmark = pytest.mark.integration

User = get_user_model()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = User.objects.create_user(username="imageuser", password="testpass123")
    client.force_authenticate(user=user)
    return client


def _image(**overrides) -> dict:
    data = {
        "url": "http://media.example.com/a.png",
        "secure_url": "https://media.example.com/a.png",
        "public_id": "catalog/a",
        "media_service_id": str(uuid.uuid4()),
    }
    data.update(overrides)
    return data


def _post(client, path: str, payload: dict):
    return client.post(path, payload, format="json")


# ===========================================================================
# Single owner
# ===========================================================================


class TestAddImageEndpoint:
    def test_created(self, auth_client, make_owner):
        owner = make_owner("physical_good")
        payload = _image(owner_id=str(owner.id))

        response = _post(auth_client, "/api/v1/images/physical_good/", payload)

        assert response.status_code == 201
        assert response.json() == {
            "media_service_id": payload["media_service_id"],
            "owner_id": str(owner.id),
        }
        owner.refresh_from_db()
        assert owner.uploaded_image_amount == 1

    def test_invalid_payload_400(self, auth_client, make_owner):
        owner = make_owner("seminar")

        response = _post(
            auth_client, "/api/v1/images/seminar/", _image(url="nope", owner_id=str(owner.id))
        )

        assert response.status_code == 400
        assert "detail" in response.json()

    def test_unknown_owner_type_400(self, auth_client):
        response = _post(
            auth_client, "/api/v1/images/book/", _image(owner_id=str(uuid.uuid4()))
        )

        assert response.status_code == 400
        assert "book" in response.json()["detail"]

    def test_owner_not_found_404(self, auth_client):
        response = _post(
            auth_client, "/api/v1/images/course/", _image(owner_id=str(uuid.uuid4()))
        )

        assert response.status_code == 404

    def test_limit_exceeded_400(self, auth_client, make_owner):
        owner = make_owner("training_session")
        for _ in range(5):
            _post(
                auth_client,
                "/api/v1/images/training_session/",
                _image(owner_id=str(owner.id)),
            )

        response = _post(
            auth_client,
            "/api/v1/images/training_session/",
            _image(owner_id=str(owner.id)),
        )

        assert response.status_code == 400
        assert "Maximum number of uploaded images" in response.json()["detail"]

    def test_internal_error_500_hides_details(self, auth_client):
        with patch.object(
            ImageService, "add", side_effect=ImageOperationFailed("db exploded")
        ):
            response = _post(
                auth_client,
                "/api/v1/images/physical_good/",
                _image(owner_id=str(uuid.uuid4())),
            )

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error."}


class TestDeleteImageEndpoint:
    def test_deleted(self, auth_client, make_owner):
        owner = make_owner("physical_good")
        payload = _image(owner_id=str(owner.id))
        _post(auth_client, "/api/v1/images/physical_good/", payload)

        response = _post(
            auth_client,
            "/api/v1/images/physical_good/delete/",
            {"media_service_id": payload["media_service_id"], "owner_id": str(owner.id)},
        )

        assert response.status_code == 200
        owner.refresh_from_db()
        assert owner.uploaded_image_amount == 0

    def test_image_not_on_owner_404(self, auth_client, make_owner):
        owner = make_owner("seminar")

        response = _post(
            auth_client,
            "/api/v1/images/seminar/delete/",
            {"media_service_id": str(uuid.uuid4()), "owner_id": str(owner.id)},
        )

        assert response.status_code == 404


# ===========================================================================
# Batch
# ===========================================================================


class TestBatchEndpoints:
    def test_add_batch(self, auth_client, make_owner):
        owners = [make_owner("course") for _ in range(2)]

        response = _post(
            auth_client,
            "/api/v1/images/course/batch/",
            _image(owner_ids=[str(o.id) for o in owners]),
        )

        assert response.status_code == 200
        assert response.json() == {"owners_affected": 2}

    def test_add_batch_empty_owner_ids_400(self, auth_client):
        response = _post(auth_client, "/api/v1/images/course/batch/", _image(owner_ids=[]))

        assert response.status_code == 400

    def test_add_batch_no_owners_404(self, auth_client):
        response = _post(
            auth_client,
            "/api/v1/images/course/batch/",
            _image(owner_ids=[str(uuid.uuid4())]),
        )

        assert response.status_code == 404

    def test_delete_batch(self, auth_client, make_owner):
        owners = [make_owner("seminar") for _ in range(3)]
        image = _image()
        _post(
            auth_client,
            "/api/v1/images/seminar/batch/",
            {**image, "owner_ids": [str(o.id) for o in owners[:2]]},
        )

        response = _post(
            auth_client,
            "/api/v1/images/seminar/batch/delete/",
            {
                "media_service_id": image["media_service_id"],
                "owner_ids": [str(o.id) for o in owners],
            },
        )

        assert response.status_code == 200
        assert response.json() == {"owners_affected": 2}


# ===========================================================================
# Authentication
# ===========================================================================


class TestAuthentication:
    @pytest.mark.parametrize(
        "path",
        [
            "/api/v1/images/physical_good/",
            "/api/v1/images/physical_good/delete/",
            "/api/v1/images/physical_good/batch/",
            "/api/v1/images/physical_good/batch/delete/",
        ],
    )
    def test_requires_authentication(self, api_client, path):
        response = api_client.post(path, {}, format="json")

        assert response.status_code == 401


# ===========================================================================
# Content negotiation
# ===========================================================================


class TestJsonOnly:
    def test_form_encoded_batch_rejected(self, auth_client, make_owner):
        owners = [make_owner("course") for _ in range(2)]

        response = auth_client.post(
            "/api/v1/images/course/batch/",
            _image(owner_ids=[str(o.id) for o in owners]),
        )

        assert response.status_code == 415
        for owner in owners:
            owner.refresh_from_db()
            assert owner.uploaded_image_amount == 0
