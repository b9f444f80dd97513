# schemas/billing.py

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Literal
from decimal import Decimal

# Largest quantity a single cart line may request (fits a 32-bit INTEGER column)
MAX_LINE_QUANTITY = 2_147_483_647


class LineItemCreate(BaseModel):
    product_id: int = Field(..., alias="productId")
    quantity: int = Field(..., gt=0, le=MAX_LINE_QUANTITY, description="Units to sell, must be positive")

    class Config:
        populate_by_name = True


class CheckoutCreate(BaseModel):
    items: List[LineItemCreate] = Field(..., min_length=1)
    customer_name: str | None = Field(None, alias="customerName", max_length=120)
    customer_phone: str | None = Field(None, alias="customerPhone", max_length=32)

    # Informational only, no payment is processed
    payment_method: Literal["cash", "upi"] = Field("cash", alias="paymentMethod")

    class Config:
        populate_by_name = True


class CheckoutResponse(BaseModel):
    msg: str
    bill_id: int = Field(..., alias="billId")
    pdf_path: str = Field(..., alias="pdfPath")
    invoice_generated: bool = Field(..., alias="invoiceGenerated")

    class Config:
        populate_by_name = True


class BillItemResponse(BaseModel):
    product_id: int | None = Field(None, alias="productId")
    product_name: str = Field(..., alias="productName")
    quantity: int
    unit_price: Decimal = Field(..., alias="price")
    line_total: Decimal = Field(..., alias="lineTotal")

    class Config:
        from_attributes = True
        populate_by_name = True


class BillResponse(BaseModel):
    id: int
    items: List[BillItemResponse]
    total: Decimal
    customer_name: str | None = Field(None, alias="customerName")
    customer_phone: str | None = Field(None, alias="customerPhone")
    payment_method: str = Field(..., alias="paymentMethod")
    shop_id: int = Field(..., alias="shopId")
    cashier_id: int = Field(..., alias="cashierId")
    created_at: datetime = Field(..., alias="createdAt")
    pdf_path: str = Field(..., alias="pdfPath")

    class Config:
        from_attributes = True
        populate_by_name = True


class InvoiceResponse(BaseModel):
    msg: str
    bill_id: int = Field(..., alias="billId")
    pdf_path: str = Field(..., alias="pdfPath")

    class Config:
        populate_by_name = True
