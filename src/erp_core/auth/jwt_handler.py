"""
Session token generation and validation.

A session token is a signed JWT carrying the user's profile, so a persisted
token is enough to restore the session on the next start without asking the
hosted auth service again.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from loguru import logger

from ..config import DEFAULT_JWT_ALGORITHM, DEFAULT_TOKEN_TTL_MINUTES
from .models import UserProfile


TOKEN_TYPE = "session"


@dataclass
class TokenPayload:
    """
    Decoded session token.

    Attributes:
        profile: User profile carried in the claims
        exp: Expiration timestamp
        iat: Issued at timestamp
        jti: Token ID
    """
    profile: UserProfile
    exp: datetime
    iat: datetime
    jti: str


class SessionTokenHandler:
    """
    Creates and validates session tokens.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_JWT_ALGORITHM,
        ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
    ):
        """
        Initialize handler.

        Args:
            secret_key: Secret key for signing tokens
            algorithm: JWT algorithm (default: HS256)
            ttl_minutes: Token lifetime
        """
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = timedelta(minutes=ttl_minutes)

    def create_token(self, profile: UserProfile, now: Optional[datetime] = None) -> str:
        """
        Create a session token for ``profile``.

        Args:
            profile: Signed-in user
            now: Issue time (default: current UTC time)

        Returns:
            JWT token string
        """
        if now is None:
            now = datetime.now(timezone.utc)
        expire = now + self.ttl

        payload = {
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
            "sub": profile.id,
            "email": profile.email,
            "role": profile.role.value,
            "full_name": profile.full_name,
            "jti": secrets.token_urlsafe(16),
            "type": TOKEN_TYPE,
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Session token created for {profile.email}")
        return token

    def verify_token(self, token: str) -> Optional[TokenPayload]:
        """
        Verify and decode a session token.

        Args:
            token: JWT token string

        Returns:
            TokenPayload if valid, None if expired, tampered or malformed
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.warning("Session token has expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid session token: {e}")
            return None

        if payload.get("type") != TOKEN_TYPE:
            logger.warning("Token is not a session token")
            return None

        try:
            profile = UserProfile(
                id=payload["sub"],
                email=payload["email"],
                role=payload["role"],
                full_name=payload.get("full_name"),
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Session token carries an invalid profile: {e}")
            return None

        return TokenPayload(
            profile=profile,
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            jti=payload["jti"],
        )

