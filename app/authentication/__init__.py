"""
Authentication application.

This app owns user accounts and acts as the identity directory for the
rest of the project: token issuance (simplejwt), the current identity,
and lookups by id, email or name.

Key components:
    - User model: Email-based user with a unique public name
    - IdentityDirectory: Lookups used by messaging and contacts

Usage:
    from authentication.models import User
    from authentication.services import IdentityDirectory
"""
