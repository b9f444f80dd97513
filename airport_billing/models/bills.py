# models/bills.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from airport_billing.core.invoice_paths import invoice_url
from airport_billing.database import Base


class Bill(Base):
    """One completed checkout. Written once, never updated or deleted."""

    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, index=True)

    shop_id = Column(Integer, ForeignKey("shops.id"), nullable=False, index=True)
    cashier_id = Column(Integer, ForeignKey("cashiers.id"), nullable=False, index=True)

    total = Column(Numeric(12, 2), nullable=False)

    customer_name = Column(String, nullable=True)
    customer_phone = Column(String, nullable=True)
    payment_method = Column(String, nullable=False, default="cash")

    # Set by the application (UTC, millisecond precision) so the invoice name is stable
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    items = relationship(
        "BillItem",
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="BillItem.position",
    )
    shop = relationship("Shop")
    cashier = relationship("Cashier")

    @property
    def pdf_path(self) -> str:
        return invoice_url(self.id, self.created_at)

    __table_args__ = (
        Index("ix_bills_shop_created", "shop_id", "created_at"),
        CheckConstraint("total >= 0", name="ck_bill_total_non_negative"),
        CheckConstraint("payment_method IN ('cash', 'upi')", name="ck_bill_payment_method_valid"),
    )
