"""Commission fee categories."""
from enum import Enum


class FeeCategory(str, Enum):
    """Side of the settlement a commission rate applies to."""

    RESTAURANT = "RESTAURANT"
    COURIER = "COURIER"
