"""Catalog URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.catalog.views import BookViewSet

router = DefaultRouter(trailing_slash=False)
router.register("Book", BookViewSet, basename="book")

urlpatterns = router.urls
