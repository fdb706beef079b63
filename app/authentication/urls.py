"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/register/            - Create an account
    /api/v1/auth/token/               - Obtain JWT access/refresh pair, sets token cookie
    /api/v1/auth/token/refresh/       - Refresh access token (simplejwt)
    /api/v1/auth/me/                  - Current identity
    /api/v1/auth/users/search/        - Find user by email
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.views import (
    CookieTokenObtainPairView,
    MeView,
    RegisterView,
    UserSearchView,
)

app_name = "authentication"

urlpatterns = [
    # Registration and credential issuance
    path("register/", RegisterView.as_view(), name="register"),
    path("token/", CookieTokenObtainPairView.as_view(), name="token-obtain"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    # Identity directory
    path("me/", MeView.as_view(), name="me"),
    path("users/search/", UserSearchView.as_view(), name="user-search"),
]
