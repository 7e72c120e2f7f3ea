"""Address value object."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional

from .value_objects import Coordinates


@dataclass(frozen=True)
class Address:
    """
    Postal address with optional resolved coordinates.

    Orders keep a snapshot copy of this value; later edits to the
    client's address book never change an existing order.
    """
    street: str
    number: str
    neighborhood: str
    city: str
    state: str
    zip_code: str
    complement: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    address_id: Optional[int] = field(default=None, compare=False)

    def is_complete(self) -> bool:
        """True when both coordinates are resolved."""
        return self.latitude is not None and self.longitude is not None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if not self.is_complete():
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    def with_coordinates(self, coordinates: Coordinates) -> "Address":
        return replace(
            self,
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
        )

    def to_geocoding_string(self) -> str:
        """Free-form query string for geocoding services."""
        parts = [
            f"{self.street}, {self.number}",
            self.neighborhood,
            self.city,
            self.state,
            self.zip_code,
        ]
        return ", ".join(part for part in parts if part)
