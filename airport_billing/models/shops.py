# airport_billing/models/shops.py

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from airport_billing.database import Base


class Shop(Base):
    __tablename__ = "shops"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    location = Column(String, nullable=True)

    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False, index=True)

    vendor = relationship("Vendor", back_populates="shops")
    products = relationship("Product", back_populates="shop")
