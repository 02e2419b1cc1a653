"""
Master-data form schemas.

Input contract of the client, supplier and product forms. Field names follow
the backend's camelCase JSON; Python code uses the snake_case attributes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


NAME_REQUIRED = "Nome obrigatório"
MIN_NAME_LENGTH = 2


def _require_name(value: str) -> str:
    if len(value) < MIN_NAME_LENGTH:
        raise ValueError(NAME_REQUIRED)
    return value


class _FormModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PartyForm(_FormModel):
    """Fields shared by clients and suppliers."""
    company_name: str
    category: Optional[str] = None
    cnpj: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("company_name")
    @classmethod
    def _company_name_required(cls, value: str) -> str:
        return _require_name(value)


class ClientForm(PartyForm):
    pass


class SupplierForm(PartyForm):
    pass


class ProductForm(_FormModel):
    """
    Product catalogue entry.

    ``price_tier1`` to ``price_tier3`` are unit prices by quantity bracket.
    """
    name: str
    sku: Optional[str] = None
    category: Optional[str] = None
    price_tier1: Optional[float] = None
    price_tier2: Optional[float] = None
    price_tier3: Optional[float] = None
    description: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        return _require_name(value)
