"""SQLAlchemy ORM models for clients, restaurants and addresses."""

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from .base import Base


class ClientModel(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(30), nullable=True)

    addresses = relationship("AddressModel", back_populates="client", cascade="all, delete-orphan")


class RestaurantModel(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_user_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)

    addresses = relationship("AddressModel", back_populates="restaurant", cascade="all, delete-orphan")


class AddressModel(Base):
    """Address book entry owned by exactly one client or one restaurant."""

    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=True, index=True)

    street = Column(String(255), nullable=False)
    number = Column(String(20), nullable=False)
    complement = Column(String(255), nullable=True)
    neighborhood = Column(String(120), nullable=False)
    city = Column(String(120), nullable=False)
    state = Column(String(2), nullable=False)
    zip_code = Column(String(9), nullable=False)
    latitude = Column(Numeric(10, 7), nullable=True)
    longitude = Column(Numeric(10, 7), nullable=True)
    principal = Column(Boolean, nullable=False, default=False)

    client = relationship("ClientModel", back_populates="addresses")
    restaurant = relationship("RestaurantModel", back_populates="addresses")

    __table_args__ = (
        CheckConstraint(
            "(client_id IS NULL) <> (restaurant_id IS NULL)",
            name="ck_addresses_single_owner",
        ),
    )
