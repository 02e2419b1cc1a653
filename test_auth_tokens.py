"""
Unit tests for session tokens, the credential store and the token provider.
"""

import asyncio
import stat
import threading
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from erp_core.auth import (
    CredentialStore,
    SessionTokenHandler,
    TokenAuthProvider,
    UserProfile,
    UserRole,
)
from erp_core.errors import AuthFailure


SECRET = "unit-test-secret-with-enough-bytes-for-hs256"
PROFILE = UserProfile(id="u-9", email="dora@example.com", role=UserRole.MANAGER, full_name="Dora")


class TestSessionTokenHandler:
    """Test token issue and verification."""

    def test_round_trip(self):
        """Test that a fresh token yields the same profile."""
        handler = SessionTokenHandler(SECRET)
        payload = handler.verify_token(handler.create_token(PROFILE))

        assert payload is not None
        assert payload.profile == PROFILE
        assert payload.exp > payload.iat
        assert payload.jti

    def test_expired_token(self):
        """Test that an expired token is rejected."""
        handler = SessionTokenHandler(SECRET, ttl_minutes=60)
        issued = datetime.now(timezone.utc) - timedelta(days=2)
        assert handler.verify_token(handler.create_token(PROFILE, now=issued)) is None

    def test_wrong_secret(self):
        """Test that a token signed with another key is rejected."""
        token = SessionTokenHandler("another-secret-with-enough-bytes-for-hs256").create_token(PROFILE)
        assert SessionTokenHandler(SECRET).verify_token(token) is None

    def test_garbage_token(self):
        """Test that a malformed token is rejected."""
        assert SessionTokenHandler(SECRET).verify_token("not.a.jwt") is None

    def test_wrong_token_type(self):
        """Test that tokens of another type are rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode({
            "sub": "u-9", "email": "dora@example.com", "role": "manager",
            "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp()),
            "jti": "x", "type": "refresh",
        }, SECRET, algorithm="HS256")
        assert SessionTokenHandler(SECRET).verify_token(token) is None

    def test_unknown_role_rejected(self):
        """Test that a token with an unknown role is rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode({
            "sub": "u-9", "email": "dora@example.com", "role": "superuser",
            "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp()),
            "jti": "x", "type": "session",
        }, SECRET, algorithm="HS256")
        assert SessionTokenHandler(SECRET).verify_token(token) is None


class TestCredentialStore:
    """Test token persistence."""

    def test_save_and_load(self, tmp_path):
        """Test writing and reading back a token."""
        path = tmp_path / "nested" / "token.json"
        store = CredentialStore(path)

        assert store.save_token("abc.def.ghi") is True
        assert CredentialStore(path).load_token() == "abc.def.ghi"
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_missing_file(self, tmp_path):
        """Test that no file means no token."""
        assert CredentialStore(tmp_path / "none").get_token() is None

    def test_corrupt_file(self, tmp_path):
        """Test that unreadable content means no token."""
        path = tmp_path / "token.json"
        path.write_text("{not json")
        assert CredentialStore(path).load_token() is None

        path.write_text('["a list"]')
        assert CredentialStore(path).load_token() is None

    def test_clear(self, tmp_path):
        """Test removing the token."""
        path = tmp_path / "token.json"
        store = CredentialStore(path)
        store.save_token("abc")
        store.clear_token()

        assert not path.exists()
        assert store.get_token() is None
        store.clear_token()  # no file, no error


class TestTokenAuthProvider:
    """Test the token-backed auth collaborator."""

    def make_provider(self, tmp_path):
        return TokenAuthProvider(
            CredentialStore(tmp_path / "token.json"),
            SessionTokenHandler(SECRET),
        )

    def test_no_token_means_signed_out(self, tmp_path):
        """Test the profile lookup without a stored session."""
        provider = self.make_provider(tmp_path)
        assert asyncio.run(provider.get_current_profile()) is None

    def test_sign_in_then_lookup(self, tmp_path):
        """Test restoring the profile from the stored token."""
        provider = self.make_provider(tmp_path)
        provider.sign_in(PROFILE)

        fresh = self.make_provider(tmp_path)
        assert asyncio.run(fresh.get_current_profile()) == PROFILE

    def test_rejected_token_raises(self, tmp_path):
        """Test that a bad stored token is an auth failure."""
        CredentialStore(tmp_path / "token.json").save_token("forged")
        provider = self.make_provider(tmp_path)
        with pytest.raises(AuthFailure):
            asyncio.run(provider.get_current_profile())

    def test_sign_out_clears_token(self, tmp_path):
        """Test that signing out forgets the session."""
        provider = self.make_provider(tmp_path)
        provider.sign_in(PROFILE)
        asyncio.run(provider.sign_out())

        assert not (tmp_path / "token.json").exists()
        assert asyncio.run(provider.get_current_profile()) is None

    def test_file_access_runs_off_the_event_loop(self, tmp_path):
        """Test that token reads and removal happen in a worker thread."""
        class RecordingStore(CredentialStore):
            def __init__(self, path):
                super().__init__(path)
                self.threads = []

            def get_token(self):
                self.threads.append(threading.get_ident())
                return super().get_token()

            def clear_token(self):
                self.threads.append(threading.get_ident())
                super().clear_token()

        store = RecordingStore(tmp_path / "token.json")
        provider = TokenAuthProvider(store, SessionTokenHandler(SECRET))
        provider.sign_in(PROFILE)

        async def run():
            loop_thread = threading.get_ident()
            profile = await provider.get_current_profile()
            await provider.sign_out()
            return loop_thread, profile

        loop_thread, profile = asyncio.run(run())

        assert profile == PROFILE
        assert len(store.threads) == 2
        assert loop_thread not in store.threads
