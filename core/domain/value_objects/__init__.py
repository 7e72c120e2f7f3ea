"""Domain value objects."""

from .address import Address
from .value_objects import Actor, Coordinates, EtaEstimate, EtaSource, ExecutionID

__all__ = [
    "Actor",
    "Address",
    "Coordinates",
    "EtaEstimate",
    "EtaSource",
    "ExecutionID",
]
