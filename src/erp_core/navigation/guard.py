"""
Session and navigation guard.

Holds the authentication state of the running application and decides, for
every requested view change, whether it is allowed. Views read the current
:class:`SessionState` through :attr:`SessionGuard.state`; only the guard's
operations replace it.
"""

import asyncio
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from loguru import logger

from ..auth.models import UserProfile, UserRole
from ..auth.providers import AuthProvider
from ..config import DEFAULT_AUTH_TIMEOUT
from .permissions import can_access, is_confined, landing_view
from .views import View


class AuthState(str, Enum):
    """Authentication lifecycle."""
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class SessionState:
    """
    Snapshot of the session.

    Attributes:
        auth_state: Where the session is in its lifecycle
        profile: Signed-in user (None unless authenticated)
        current_view: View the user is on
        search_term: Search carried to the destination view, consumed once
    """
    auth_state: AuthState = AuthState.LOADING
    profile: Optional[UserProfile] = None
    current_view: View = View.LOGIN
    search_term: str = ""

    @property
    def is_authenticated(self) -> bool:
        return self.auth_state is AuthState.AUTHENTICATED and self.profile is not None

    @property
    def is_loading(self) -> bool:
        return self.auth_state is AuthState.LOADING

    @property
    def role(self) -> Optional[UserRole]:
        return self.profile.role if self.profile is not None else None


SIGNED_OUT = SessionState(auth_state=AuthState.UNAUTHENTICATED, current_view=View.LOGIN)


def resolve_view(state: SessionState) -> View:
    """
    View to render for ``state``.

    Re-applies the factory confinement independently of :meth:`SessionGuard.navigate`,
    so a factory session renders the production board whatever
    ``current_view`` holds.
    """
    if not state.is_authenticated:
        return View.LOGIN

    if is_confined(state.role):
        return View.PRODUCTION

    if state.current_view is View.LOGIN or not isinstance(state.current_view, View):
        return View.DASHBOARD
    return state.current_view


class SessionGuard:
    """
    Authentication state and navigation rules.

    Lifecycle: LOADING -> AUTHENTICATED(role) | UNAUTHENTICATED, and back to
    UNAUTHENTICATED on logout or a failed re-check.

    Session checks are tagged with a sequence number; a response that arrives
    after a newer check (or a logout) was started is discarded, so the latest
    request always wins.
    """

    def __init__(self, auth: AuthProvider, timeout: float = DEFAULT_AUTH_TIMEOUT):
        """
        Initialize guard.

        Args:
            auth: Auth collaborator
            timeout: Seconds to wait for the collaborator before giving up
        """
        self.auth = auth
        self.timeout = timeout
        self._state = SessionState()
        self._sequence = 0

    @property
    def state(self) -> SessionState:
        return self._state

    async def check_session(self) -> SessionState:
        """
        Ask the auth collaborator who is signed in.

        A profile authenticates the session; when the user was on the login
        view, the role's landing view is opened. No profile, an error or a
        timeout signs the session out. Safe to call repeatedly.

        Returns:
            The state after the check
        """
        self._sequence += 1
        sequence = self._sequence

        if self._state.auth_state is not AuthState.AUTHENTICATED:
            self._state = replace(self._state, auth_state=AuthState.LOADING)

        profile: Optional[UserProfile] = None
        try:
            profile = await asyncio.wait_for(self.auth.get_current_profile(), self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Session check timed out after {self.timeout}s")
        except Exception as e:
            logger.error(f"Session check failed: {e}")

        if sequence != self._sequence:
            logger.debug(f"Discarding stale session check #{sequence}")
            return self._state

        if profile is None:
            if self._state.is_authenticated:
                logger.warning("Session lost, returning to login")
            self._state = SIGNED_OUT
            return self._state

        view = self._state.current_view
        if view is View.LOGIN:
            view = landing_view(profile.role)

        self._state = replace(
            self._state,
            auth_state=AuthState.AUTHENTICATED,
            profile=profile,
            current_view=view,
        )
        logger.info(f"Session active: {profile.email} ({profile.role.value}) on {view.value}")
        return self._state

    def navigate(self, target: Union[View, str], search_term: Optional[str] = None) -> bool:
        """
        Request a view change.

        Requests the session may not make are dropped without any error:
        nothing happens while signed out, and factory operators stay on the
        production view.

        Args:
            target: Destination view
            search_term: Search to hand to the destination view

        Returns:
            True if the view changed
        """
        state = self._state
        try:
            view = View(target)
        except ValueError:
            logger.debug(f"Ignoring navigation to unknown view {target!r}")
            return False

        if not state.is_authenticated or view is View.LOGIN:
            logger.debug(f"Ignoring navigation to {view.value}: not signed in")
            return False

        if not can_access(state.role, view):
            logger.debug(f"Ignoring navigation to {view.value} for role {state.role.value}")
            return False

        self._state = replace(
            state,
            current_view=view,
            search_term=search_term if search_term else state.search_term,
        )
        return True

    def consume_search_term(self) -> str:
        """
        Take the carried search term, leaving none behind.

        Returns:
            The search term ("" if there was none)
        """
        term = self._state.search_term
        if term:
            self._state = replace(self._state, search_term="")
        return term

    async def logout(self) -> SessionState:
        """
        Sign out and return to the login view.

        The session is reset even if the collaborator fails to sign out.
        Any session check still in flight is discarded.
        """
        self._sequence += 1
        try:
            await asyncio.wait_for(self.auth.sign_out(), self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Sign-out timed out after {self.timeout}s")
        except Exception as e:
            logger.error(f"Sign-out failed: {e}")

        # Checks started while signing out saw the old credential
        self._sequence += 1
        self._state = SIGNED_OUT
        logger.info("Signed out")
        return self._state
