"""Clients and restaurants as seen by the fulfillment core."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Client:
    user_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    id: Optional[int] = None


@dataclass
class Restaurant:
    owner_user_id: int
    name: str
    email: Optional[str] = None
    id: Optional[int] = None
