"""Actor roles."""
from enum import Enum


class ActorRole(str, Enum):
    """Role of the party performing an operation."""

    ADMIN = "ADMIN"
    CLIENT = "CLIENT"
    RESTAURANT = "RESTAURANT"
    COURIER = "COURIER"
    SYSTEM = "SYSTEM"
