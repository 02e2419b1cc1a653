"""
Application shell.

Wires the session guard to the other start-up collaborators (company
profile, backend connectivity) and answers the questions the top-level
renderer asks: which layout, which content view, which labels.
"""

import asyncio
from functools import partial
from typing import Awaitable, Callable, List, Optional, Tuple

from loguru import logger

from ..auth.credentials import CredentialStore
from ..auth.jwt_handler import SessionTokenHandler
from ..auth.models import CompanyProfile, ConnectionStatus
from ..auth.providers import JsonProfileStorage, ProfileStorage, TokenAuthProvider
from ..config import DEFAULT_COMPANY_NAME, Settings
from ..errors import ConfigurationError
from ..services.connectivity import check_connection
from .guard import SessionGuard, SessionState, resolve_view
from .permissions import can_access, get_role_label, is_confined
from .views import NAVIGATION_ITEMS, SEARCHABLE_VIEWS, Layout, View, header_title


ConnectivityCheck = Callable[[], Awaitable[ConnectionStatus]]


class AppShell:
    """
    Root of the running application.

    Holds the session guard plus the session-wide cached company profile and
    connection status. Views receive the shell (or just ``shell.state``)
    instead of reaching for global state.
    """

    def __init__(
        self,
        guard: SessionGuard,
        storage: Optional[ProfileStorage] = None,
        connectivity: Optional[ConnectivityCheck] = None,
        company_name: str = DEFAULT_COMPANY_NAME,
    ):
        """
        Initialize shell.

        Args:
            guard: Session guard
            storage: Company profile source (None: no profile)
            connectivity: Backend connectivity check (None: not checked)
            company_name: Name shown when no company profile is loaded
        """
        self.guard = guard
        self.storage = storage
        self.connectivity = connectivity
        self.default_company_name = company_name
        self.company_profile: Optional[CompanyProfile] = None
        self.connection_status: Optional[ConnectionStatus] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppShell":
        """
        Build a shell backed by the persisted session token.

        Raises:
            ConfigurationError: If no JWT secret is configured
        """
        if not settings.jwt_secret:
            raise ConfigurationError("ERP_JWT_SECRET is required for token sessions")

        auth = TokenAuthProvider(
            CredentialStore(settings.token_file),
            SessionTokenHandler(
                settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                ttl_minutes=settings.token_ttl_minutes,
            ),
        )
        connectivity = None
        if settings.backend_url:
            connectivity = partial(
                check_connection,
                settings.backend_url,
                timeout=settings.connectivity_timeout,
            )

        return cls(
            SessionGuard(auth, timeout=settings.auth_timeout),
            storage=JsonProfileStorage(settings.company_profile),
            connectivity=connectivity,
            company_name=settings.company_name,
        )

    @property
    def state(self) -> SessionState:
        return self.guard.state

    # ========================================================================
    # Lifecycle
    # ========================================================================

    async def start(self) -> None:
        """Check the session, the backend and load the company profile."""
        await asyncio.gather(
            self.guard.check_session(),
            self.refresh_connection(),
            self.load_company_profile(),
        )

    async def on_login_success(self) -> None:
        await asyncio.gather(
            self.guard.check_session(),
            self.load_company_profile(),
        )

    async def logout(self) -> None:
        await self.guard.logout()

    def navigate(self, target, search_term: Optional[str] = None) -> bool:
        return self.guard.navigate(target, search_term)

    async def load_company_profile(self) -> Optional[CompanyProfile]:
        """
        Reload the cached company profile.

        A failing storage leaves the shell without a profile; the default
        company name is shown instead.
        """
        if self.storage is None:
            return None

        try:
            self.company_profile = await self.storage.get_company_profile()
        except Exception as e:
            logger.error(f"Failed to load company profile: {e}")
            self.company_profile = None
        return self.company_profile

    async def refresh_connection(self) -> Optional[ConnectionStatus]:
        """
        Re-run the connectivity check.

        The result only feeds the banner; a failing check is reported as an
        unsuccessful status.
        """
        if self.connectivity is None:
            return None

        try:
            self.connection_status = await self.connectivity()
        except Exception as e:
            logger.error(f"Connectivity check failed: {e}")
            self.connection_status = ConnectionStatus(success=False, message=str(e))
            return self.connection_status

        if not self.connection_status.success:
            logger.warning(f"Backend unreachable: {self.connection_status.message}")
        return self.connection_status

    # ========================================================================
    # Rendering decisions
    # ========================================================================

    def layout(self) -> Layout:
        state = self.state
        if state.is_loading:
            return Layout.LOADING
        if not state.is_authenticated or state.current_view is View.LOGIN:
            return Layout.LOGIN
        if is_confined(state.role):
            return Layout.FACTORY
        return Layout.FULL

    def content_view(self) -> View:
        """View whose content is rendered (factory sessions always get production)."""
        return resolve_view(self.state)

    def title(self) -> str:
        return header_title(self.content_view())

    def sidebar(self) -> List[Tuple[View, str]]:
        """Navigation entries the current role may open."""
        role = self.state.role
        return [(view, label) for view, label in NAVIGATION_ITEMS if can_access(role, view)]

    def take_search_term(self) -> str:
        """Search term for the current view, cleared once handed out."""
        if self.content_view() not in SEARCHABLE_VIEWS:
            return ""
        return self.guard.consume_search_term()

    def display_name(self) -> str:
        profile = self.state.profile
        if profile is not None and profile.full_name:
            return profile.full_name
        return get_role_label(self.state.role)

    def company_name(self) -> str:
        if self.company_profile is not None and self.company_profile.name:
            return self.company_profile.name
        return self.default_company_name

    def connection_warning(self) -> Optional[str]:
        """Message for the connectivity banner, None when there is nothing to show."""
        status = self.connection_status
        if status is None or status.success:
            return None
        return status.message or "Backend unreachable"
