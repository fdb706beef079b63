"""
URL configuration for contacts API.

URL Structure:
    /                GET, POST
    /{id}/           GET, PATCH, DELETE

All URLs are prefixed with /api/v1/contacts/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from contacts.views import ContactViewSet

router = SimpleRouter()
router.register(r"", ContactViewSet, basename="contact")

app_name = "contacts"

urlpatterns = [
    path("", include(router.urls)),
]
