"""
Role-based view access.

This module provides:
- The view set each role may open
- Landing view selection after sign-in
- Role labels shown in the sidebar and factory header
"""

from typing import Dict, FrozenSet, Optional, Union

from ..auth.models import UserRole
from .views import View


_ALL_VIEWS = frozenset(view for view in View if view is not View.LOGIN)

# Map each role to the views it may open
ROLE_VIEWS: Dict[UserRole, FrozenSet[View]] = {
    UserRole.ADMIN: _ALL_VIEWS,
    UserRole.MANAGER: _ALL_VIEWS,
    # Shop-floor operators are confined to the production board
    UserRole.FACTORY: frozenset({View.PRODUCTION}),
}

ROLE_LABELS: Dict[UserRole, str] = {
    UserRole.ADMIN: "ADMINISTRADOR",
    UserRole.MANAGER: "GERENTE",
    UserRole.FACTORY: "OPERADOR",
}

DEFAULT_ROLE_LABEL = "COLABORADOR"


def _as_role(role: Union[UserRole, str, None]) -> Optional[UserRole]:
    if role is None:
        return None
    try:
        return UserRole(role)
    except ValueError:
        # Unknown role, no access
        return None


def can_access(role: Union[UserRole, str, None], view: View) -> bool:
    """
    Check if a role may open a view.

    Args:
        role: The user's role
        view: Requested view

    Returns:
        bool: True if the view is in the role's view set
    """
    role_enum = _as_role(role)
    if role_enum is None:
        return False
    return view in ROLE_VIEWS.get(role_enum, frozenset())


def is_confined(role: Union[UserRole, str, None]) -> bool:
    """True for roles locked to the production view."""
    return _as_role(role) is UserRole.FACTORY


def landing_view(role: Union[UserRole, str, None]) -> View:
    """View opened right after sign-in."""
    return View.PRODUCTION if is_confined(role) else View.DASHBOARD


def get_role_label(role: Union[UserRole, str, None]) -> str:
    """Uppercase display label for a role."""
    role_enum = _as_role(role)
    if role_enum is None:
        return DEFAULT_ROLE_LABEL
    return ROLE_LABELS.get(role_enum, DEFAULT_ROLE_LABEL)


def role_badge(role: Union[UserRole, str, None]) -> str:
    """Two-letter avatar badge shown in the sidebar."""
    return "AD" if _as_role(role) is UserRole.ADMIN else "MG"
