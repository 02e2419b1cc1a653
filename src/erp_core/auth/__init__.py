"""
Authentication module for erp-core.

User and company profiles, session tokens and the auth/storage collaborators
consumed by the session guard.
"""

from .models import CompanyProfile, ConnectionStatus, UserProfile, UserRole
from .jwt_handler import SessionTokenHandler, TokenPayload
from .credentials import CredentialStore
from .providers import (
    AuthProvider,
    JsonProfileStorage,
    ProfileStorage,
    TokenAuthProvider,
)

__all__ = [
    # Models
    "CompanyProfile",
    "ConnectionStatus",
    "UserProfile",
    "UserRole",
    # Tokens
    "SessionTokenHandler",
    "TokenPayload",
    "CredentialStore",
    # Collaborators
    "AuthProvider",
    "JsonProfileStorage",
    "ProfileStorage",
    "TokenAuthProvider",
]
