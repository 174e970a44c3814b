"""SQLAlchemy ORM models for orders and products."""

from decimal import Decimal

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Order(Base):
    """Order table schema."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column(String, nullable=False, default="")
    total = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    # Order owns its products: saves and deletes cascade down, never up
    products = relationship(
        "Product",
        back_populates="order",
        cascade="all",
        order_by="Product.id",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Order(id={self.id}, customer='{self.customer_name}', total={self.total})>"


class Product(Base):
    """Products table schema."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, default="")
    price = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    order_id = Column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=True, index=True
    )

    # Lookup through order_id only: a product never saves or merges its order
    order = relationship("Order", back_populates="products", cascade="", lazy="joined")

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', price={self.price}, order_id={self.order_id})>"
