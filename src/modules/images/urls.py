"""Image URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.images.views import ImageViewSet

urlpatterns = [
    path(
        "images/<str:owner_type>/",
        ImageViewSet.as_view({"post": "add"}),
        name="image-add",
    ),
    path(
        "images/<str:owner_type>/delete/",
        ImageViewSet.as_view({"post": "remove"}),
        name="image-delete",
    ),
    path(
        "images/<str:owner_type>/batch/",
        ImageViewSet.as_view({"post": "add_batch"}),
        name="image-add-batch",
    ),
    path(
        "images/<str:owner_type>/batch/delete/",
        ImageViewSet.as_view({"post": "remove_batch"}),
        name="image-delete-batch",
    ),
]
