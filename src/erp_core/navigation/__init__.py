"""
Session and navigation guard for erp-core.

Role-gated view access with navigation-time and render-time enforcement.
"""

from .views import NAVIGATION_ITEMS, SEARCHABLE_VIEWS, Layout, View, header_title
from .permissions import (
    ROLE_LABELS,
    ROLE_VIEWS,
    can_access,
    get_role_label,
    is_confined,
    landing_view,
    role_badge,
)
from .guard import AuthState, SessionGuard, SessionState, resolve_view
from .shell import AppShell

__all__ = [
    # Views
    "NAVIGATION_ITEMS",
    "SEARCHABLE_VIEWS",
    "Layout",
    "View",
    "header_title",
    # Role access
    "ROLE_LABELS",
    "ROLE_VIEWS",
    "can_access",
    "get_role_label",
    "is_confined",
    "landing_view",
    "role_badge",
    # Guard
    "AuthState",
    "SessionGuard",
    "SessionState",
    "resolve_view",
    "AppShell",
]
