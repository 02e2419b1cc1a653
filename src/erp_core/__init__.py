"""
erp-core: calendar engine and role-gated session guard.

Provides the date arithmetic used by the finance and reporting views and the
session/navigation rules of the application shell.
"""

from .config import Settings
from .errors import AuthFailure, ConfigurationError, ErpError, InvalidDateError
from .dates import (
    IsoDate,
    Period,
    add_business_days,
    add_calendar_months,
    count_business_days,
    delivery_deadline,
    is_expired,
    is_in_period,
    period_bounds,
    recurring_due_dates,
    set_day_of_month,
    today_str,
)
from .auth import (
    AuthProvider,
    CompanyProfile,
    ConnectionStatus,
    ProfileStorage,
    UserProfile,
    UserRole,
)
from .navigation import (
    AppShell,
    AuthState,
    Layout,
    SessionGuard,
    SessionState,
    View,
    resolve_view,
)

__version__ = "1.0.0"

__all__ = [
    "Settings",
    # Errors
    "AuthFailure",
    "ConfigurationError",
    "ErpError",
    "InvalidDateError",
    # Calendar engine
    "IsoDate",
    "Period",
    "add_business_days",
    "add_calendar_months",
    "count_business_days",
    "delivery_deadline",
    "is_expired",
    "is_in_period",
    "period_bounds",
    "recurring_due_dates",
    "set_day_of_month",
    "today_str",
    # Profiles and collaborators
    "AuthProvider",
    "CompanyProfile",
    "ConnectionStatus",
    "ProfileStorage",
    "UserProfile",
    "UserRole",
    # Session guard
    "AppShell",
    "AuthState",
    "Layout",
    "SessionGuard",
    "SessionState",
    "View",
    "resolve_view",
]
