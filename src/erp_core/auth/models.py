"""
Authentication data models.

Profiles returned by the auth and storage collaborators, validated with
pydantic at the boundary.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    """
    Roles known to the application.
    """
    ADMIN = "admin"         # Full access
    MANAGER = "manager"     # Full access, shown as manager
    FACTORY = "factory"     # Shop-floor operator, production view only


class UserProfile(BaseModel):
    """
    Signed-in user.

    Attributes:
        id: User identifier (matches the auth service's user id)
        email: User email address
        role: Application role
        full_name: Display name (optional)
    """
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    role: UserRole
    full_name: Optional[str] = None


class CompanyProfile(BaseModel):
    """
    Company identity and defaults, shown in headers and printed documents.

    Only ``name`` is used by the application shell; the remaining fields are
    carried for the views that print budgets and invoices.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    cnpj: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    website: Optional[str] = None
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None

    # Banking
    bank_name: Optional[str] = None
    bank_agency: Optional[str] = None
    bank_account: Optional[str] = None
    bank_holder: Optional[str] = None
    pix_key: Optional[str] = None

    # Settings & goals
    default_tax_rate: Optional[float] = None
    revenue_goal: Optional[float] = None
    expense_limit: Optional[float] = None


class ConnectionStatus(BaseModel):
    """Result of a backend connectivity check."""
    success: bool
    message: Optional[str] = None
