"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication and identity endpoints
        token/                     - Obtain JWT pair
        token/refresh/             - Refresh access token
        me/                        - Current identity
        users/search/              - Find user by email
    /api/v1/messaging/             - Messaging endpoints
        chats/                     - Chat list
        conversations/{partner}/messages/ - History (paged) / send
        conversations/{partner}/read/     - Mark conversation as read
        messages/{id}/             - Edit / delete message
    /api/v1/contacts/              - Contacts list/create
        {id}/                      - Contact get/rename/delete

WebSocket routes live in realtime/routing.py (see config/asgi.py).

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication (simplejwt) and identity directory
    path("auth/", include("authentication.urls")),
    # Messaging
    path("messaging/", include("messaging.urls")),
    # Contacts
    path("contacts/", include("contacts.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Messaging Admin"
admin.site.site_title = "Admin Portal"
admin.site.index_title = "Welcome to the Admin Portal"
