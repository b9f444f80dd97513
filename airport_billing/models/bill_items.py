# models/bill_items.py

from sqlalchemy import CheckConstraint, Column, Integer, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from airport_billing.database import Base


class BillItem(Base):
    __tablename__ = "bill_items"

    id = Column(Integer, primary_key=True, index=True)

    bill_id = Column(Integer, ForeignKey("bills.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)

    # Cart order within the bill
    position = Column(Integer, nullable=False)

    # Snapshots taken at sale time; later product edits do not touch them
    product_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    line_total = Column(Numeric(12, 2), nullable=False)

    bill = relationship("Bill", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_bill_item_quantity_positive"),
    )
