"""
Views and layouts of the application shell.
"""

from enum import Enum
from typing import List, Tuple


class View(str, Enum):
    """Top-level views a session can be on."""
    DASHBOARD = "dashboard"
    FINANCE = "finance"
    BUDGETS = "budgets"
    ORDERS = "orders"
    PRODUCTION = "production"
    MASTERDATA = "masterdata"
    INTELLIGENCE = "intelligence"
    LOGIN = "login"


class Layout(str, Enum):
    """Which frame the shell renders around the content."""
    LOADING = "loading"     # Session check in flight
    LOGIN = "login"         # Login form only
    FACTORY = "factory"     # Header + production board, no sidebar
    FULL = "full"           # Sidebar + header + content


# Sidebar entries, in display order
NAVIGATION_ITEMS: List[Tuple[View, str]] = [
    (View.DASHBOARD, "Dashboard"),
    (View.INTELLIGENCE, "Inteligência"),
    (View.FINANCE, "Financeiro"),
    (View.BUDGETS, "Orçamentos"),
    (View.ORDERS, "Pedidos"),
    (View.PRODUCTION, "Fábrica"),
    (View.MASTERDATA, "Cadastros"),
]

# Views that accept a search term carried in by navigation
SEARCHABLE_VIEWS = frozenset({View.BUDGETS, View.ORDERS})


def header_title(view: View) -> str:
    """Title shown in the content header."""
    if view is View.MASTERDATA:
        return "Cadastros"
    return view.value.capitalize()
