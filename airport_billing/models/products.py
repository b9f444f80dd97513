# airport_billing/models/products.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, Numeric, ForeignKey, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from airport_billing.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    # Only the stock ledger decrements this during checkout
    quantity = Column(Integer, nullable=False, default=0)
    low_stock_threshold = Column(Integer, nullable=False, default=5)

    shop_id = Column(Integer, ForeignKey("shops.id"), nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    shop = relationship("Shop", back_populates="products")

    __table_args__ = (
        Index("ix_products_shop", "shop_id"),
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("quantity >= 0", name="ck_product_quantity_non_negative"),
        CheckConstraint("low_stock_threshold >= 0", name="ck_product_low_stock_non_negative"),
    )
