"""
Presentation helpers.

Brazilian display formats for dates, money and document numbers. Storage
and arithmetic always use ISO dates; these are for display only.
"""

import re

from .dates.isodate import ISO_DATE_PATTERN


NBSP = "\xa0"


def format_date(date_str: str) -> str:
    """
    ISO date to ``DD/MM/YYYY``.

    Examples:
        >>> format_date("2024-03-15T10:00:00")
        '15/03/2024'
        >>> format_date("")
        '-'
    """
    if not date_str:
        return "-"

    match = ISO_DATE_PATTERN.match(date_str[:10])
    if not match:
        return date_str

    year, month, day = match.groups()
    return f"{day}/{month}/{year}"


def format_currency(value: float) -> str:
    """
    Format an amount in reais (``R$ 1.234,56``).

    The symbol is separated by a non-breaking space.
    """
    sign = "-" if value < 0 else ""
    # 1,234.56 -> 1.234,56
    digits = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R${NBSP}{digits}"


def mask_cnpj(value: str) -> str:
    """
    Apply the CNPJ mask while typing (``11.222.333/0001-81``).
    """
    v = re.sub(r"\D", "", value)
    v = re.sub(r"^(\d{2})(\d)", r"\1.\2", v, count=1)
    v = re.sub(r"^(\d{2})\.(\d{3})(\d)", r"\1.\2.\3", v, count=1)
    v = re.sub(r"\.(\d{3})(\d)", r".\1/\2", v, count=1)
    v = re.sub(r"(\d{4})(\d)", r"\1-\2", v, count=1)
    return v[:18]


def mask_phone(value: str) -> str:
    """
    Apply the phone mask while typing (``(11) 98765-4321``).
    """
    v = re.sub(r"\D", "", value)
    v = re.sub(r"^(\d{2})(\d)", r"(\1) \2", v, count=1)
    v = re.sub(r"(\d)(\d{4})$", r"\1-\2", v, count=1)
    return v[:15]
