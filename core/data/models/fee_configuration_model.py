"""SQLAlchemy ORM model for commission-rate configurations."""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, Numeric, String

from .base import Base, utcnow


class FeeConfigurationModel(Base):
    __tablename__ = "fee_configurations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(String(20), nullable=False)
    percent = Column(Numeric(5, 2), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_fee_configurations_category_active", "category", "active"),
    )
