"""
Collaborator contracts and the adapters shipped with the package.

The session guard only talks to an :class:`AuthProvider`; the application
shell additionally reads the company profile from a :class:`ProfileStorage`.
Both are protocols so the hosted backend client can be plugged in directly.
"""

import asyncio
from pathlib import Path
from typing import Optional, Protocol

from loguru import logger
from pydantic import ValidationError

from ..errors import AuthFailure
from .credentials import CredentialStore
from .jwt_handler import SessionTokenHandler
from .models import CompanyProfile, UserProfile


class AuthProvider(Protocol):
    """Auth collaborator."""

    async def get_current_profile(self) -> Optional[UserProfile]:
        """Profile of the signed-in user, None when signed out. May raise."""
        ...

    async def sign_out(self) -> None:
        ...


class ProfileStorage(Protocol):
    """Profile-storage collaborator."""

    async def get_company_profile(self) -> Optional[CompanyProfile]:
        ...


class TokenAuthProvider:
    """
    Auth provider backed by a persisted session token.

    After the hosted service signs a user in, :meth:`sign_in` issues a local
    session token and stores it; later starts restore the profile from that
    token.
    """

    def __init__(self, store: CredentialStore, tokens: SessionTokenHandler):
        """
        Initialize provider.

        Args:
            store: Where the token is persisted
            tokens: Token issuer/verifier
        """
        self.store = store
        self.tokens = tokens

    def sign_in(self, profile: UserProfile) -> str:
        """
        Issue and persist a session token for ``profile``.

        Returns:
            The issued token

        Raises:
            AuthFailure: If the token could not be stored
        """
        token = self.tokens.create_token(profile)
        if not self.store.save_token(token):
            raise AuthFailure(f"Could not persist session for {profile.email}")
        logger.info(f"Signed in: {profile.email} ({profile.role.value})")
        return token

    async def get_current_profile(self) -> Optional[UserProfile]:
        """
        Profile from the stored token.

        Returns:
            UserProfile, or None when no token is stored

        Raises:
            AuthFailure: If the stored token is expired or invalid
        """
        token = await asyncio.to_thread(self.store.get_token)
        if not token:
            return None

        payload = self.tokens.verify_token(token)
        if payload is None:
            raise AuthFailure("Stored session token was rejected")
        return payload.profile

    async def sign_out(self) -> None:
        """
        Forget the stored token.

        Raises:
            AuthFailure: If the token file cannot be removed
        """
        try:
            await asyncio.to_thread(self.store.clear_token)
        except OSError as e:
            raise AuthFailure(f"Failed to clear session token: {e}") from e


class JsonProfileStorage:
    """
    Company profile read from a JSON file.
    """

    def __init__(self, path: Optional[Path]):
        """
        Initialize storage.

        Args:
            path: JSON file with the company profile (None: no profile)
        """
        self.path = Path(path) if path is not None else None

    async def get_company_profile(self) -> Optional[CompanyProfile]:
        """
        Load the company profile.

        Returns:
            CompanyProfile, or None if the file is missing or invalid
        """
        if self.path is None or not self.path.exists():
            return None

        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
            return CompanyProfile.model_validate_json(text)
        except OSError as e:
            logger.error(f"Failed to read company profile {self.path}: {e}")
            return None
        except ValidationError as e:
            logger.error(f"Invalid company profile {self.path}: {e}")
            return None
