"""SQLAlchemy ORM model for couriers."""

from sqlalchemy import Column, Integer, Numeric, String

from .base import Base


class CourierModel(Base):
    """SQLAlchemy ORM model for couriers table."""

    __tablename__ = "couriers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(30), nullable=True)
    status = Column(String(30), nullable=False, default="PENDING_APPROVAL")
    vehicle_type = Column(String(20), nullable=False)
    plate = Column(String(10), nullable=True)
    latitude = Column(Numeric(10, 7), nullable=True)
    longitude = Column(Numeric(10, 7), nullable=True)
