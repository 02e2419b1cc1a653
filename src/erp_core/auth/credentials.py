"""
Persisted session credential.

Stores the session token on disk so the session can be re-derived when the
application starts again.
"""

import json
from pathlib import Path
from typing import Optional

from loguru import logger

from ..config import DEFAULT_TOKEN_FILE


class CredentialStore:
    """
    Token file storage.

    The file holds a small JSON document (``{"access_token": ...}``) and is
    written with 0600 permissions.
    """

    def __init__(self, token_file: Optional[Path] = None):
        """
        Initialize store.

        Args:
            token_file: Path to the token file (default: ~/.erp_core_token)
        """
        if token_file is None:
            token_file = DEFAULT_TOKEN_FILE

        self.token_file = Path(token_file)
        self._token: Optional[str] = None

    def load_token(self) -> Optional[str]:
        """
        Load the token from file.

        Returns:
            Token string, or None if there is no usable file
        """
        if not self.token_file.exists():
            return None

        try:
            with open(self.token_file, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load token: {e}")
            return None

        if not isinstance(data, dict):
            logger.error(f"Unexpected token file layout: {self.token_file}")
            return None

        self._token = data.get("access_token") or None
        return self._token

    def save_token(self, access_token: str) -> bool:
        """
        Save the token to file.

        Returns:
            True if saved successfully
        """
        try:
            self.token_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.token_file, "w") as f:
                json.dump({"access_token": access_token}, f, indent=2)
            self.token_file.chmod(0o600)  # rw-------
        except OSError as e:
            logger.error(f"Failed to save token: {e}")
            return False

        self._token = access_token
        logger.info(f"Token saved to {self.token_file}")
        return True

    def clear_token(self) -> None:
        """
        Remove the stored token.

        Raises:
            OSError: If the file exists but cannot be removed
        """
        self._token = None
        if self.token_file.exists():
            self.token_file.unlink()
            logger.info("Token cleared")

    def get_token(self) -> Optional[str]:
        """Current token, loading it from file if not in memory."""
        if self._token is None:
            self._token = self.load_token()
        return self._token
