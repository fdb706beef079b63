"""
Tests for authentication app.

This package contains test modules for:
- test_managers.py: UserManager tests
- test_services.py: IdentityDirectory tests
- test_views.py: Token, me and user search endpoint tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_services.py
"""
