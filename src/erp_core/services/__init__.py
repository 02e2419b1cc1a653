"""External service checks."""

from .connectivity import check_connection

__all__ = ["check_connection"]
