# airport_billing/models/cashiers.py

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from airport_billing.database import Base


class Cashier(Base):
    __tablename__ = "cashiers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    shop_id = Column(Integer, ForeignKey("shops.id"), nullable=False, index=True)

    shop = relationship("Shop")
