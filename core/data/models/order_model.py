"""SQLAlchemy ORM models for Order aggregate."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    courier_id = Column(Integer, ForeignKey("couriers.id"), nullable=True, index=True)
    coupon_id = Column(Integer, ForeignKey("coupons.id"), nullable=True)

    status = Column(String(30), nullable=False, default="CREATED", index=True)
    payment_method = Column(String(20), nullable=False)
    change_for = Column(Numeric(10, 2), nullable=True)
    notes = Column(Text, nullable=True)

    # Delivery address snapshot
    delivery_street = Column(String(255), nullable=True)
    delivery_number = Column(String(20), nullable=True)
    delivery_complement = Column(String(255), nullable=True)
    delivery_neighborhood = Column(String(120), nullable=True)
    delivery_city = Column(String(120), nullable=True)
    delivery_state = Column(String(2), nullable=True)
    delivery_zip_code = Column(String(9), nullable=True)
    delivery_latitude = Column(Numeric(10, 7), nullable=True)
    delivery_longitude = Column(Numeric(10, 7), nullable=True)

    # Financial data
    subtotal = Column(Numeric(10, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), nullable=False)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False)

    # Settlement (filled on delivery)
    restaurant_platform_fee = Column(Numeric(10, 2), nullable=True)
    restaurant_net_value = Column(Numeric(10, 2), nullable=True)
    courier_platform_fee = Column(Numeric(10, 2), nullable=True)
    courier_net_value = Column(Numeric(10, 2), nullable=True)

    estimated_delivery_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    version = Column(Integer, nullable=False, default=0)

    # Relationship to items
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
    )

    __table_args__ = (
        Index("ix_orders_status_courier", "status", "courier_id"),
    )

    # UPDATEs issued by the ORM compare and bump the version column
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<OrderModel(id={self.id}, status={self.status}, courier_id={self.courier_id})>"


class OrderItemModel(Base):
    """SQLAlchemy ORM model for order_items table."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    product_name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    # Relationship back to order
    order = relationship("OrderModel", back_populates="items")
