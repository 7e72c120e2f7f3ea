"""Catalog product snapshot."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Product:
    """Sellable catalog item as returned by the catalog lookup."""
    id: int
    restaurant_id: int
    name: str
    price: Decimal
    available: bool = True
    description: Optional[str] = None
