"""Commission-rate configuration entity."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..enums import FeeCategory


@dataclass
class FeeConfiguration:
    """
    Versioned commission rate for one fee category.

    Only one row per category is active at a time; creating a new one
    deactivates the previous rows.
    """
    category: FeeCategory
    percent: Decimal
    active: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def deactivate(self) -> None:
        self.active = False
