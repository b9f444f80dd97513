"""
Tests for invoice naming and rendering.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

from airport_billing.core.config import settings
from airport_billing.core.invoice_paths import format_timestamp, invoice_file_path, invoice_filename, invoice_url
from airport_billing.models.bills import Bill
from airport_billing.models.bill_items import BillItem
from airport_billing.models.cashiers import Cashier
from airport_billing.models.shops import Shop
from airport_billing.services.invoice import InvoiceRenderer, money, render_invoice


def build_bill(customer_name=None, customer_phone=None) -> Bill:
    bill = Bill(
        id=42,
        shop_id=1,
        cashier_id=1,
        total=Decimal("491.50"),
        customer_name=customer_name,
        customer_phone=customer_phone,
        payment_method="upi",
        created_at=datetime(2025, 3, 1, 9, 15, 30, 123000, tzinfo=timezone.utc),
    )
    bill.shop = Shop(id=1, name="SkyMart T1", location="Terminal 1, Gate 4", vendor_id=1)
    bill.cashier = Cashier(id=1, name="Asha", email="asha@skymart.test", shop_id=1)
    bill.items = [
        BillItem(position=0, product_id=1, product_name="Water Bottle", quantity=2,
                 unit_price=Decimal("20.00"), line_total=Decimal("40.00")),
        BillItem(position=1, product_id=2, product_name="Sandwich & Chips", quantity=3,
                 unit_price=Decimal("150.50"), line_total=Decimal("451.50")),
    ]
    return bill


class TestInvoiceNaming:

    def test_filename_format(self):
        created_at = datetime(2025, 3, 1, 9, 15, 30, 123456, tzinfo=timezone.utc)

        assert invoice_filename(42, created_at) == "invoice-42-2025-03-01_09-15-30-123.pdf"

    def test_naive_timestamps_are_utc(self):
        aware = datetime(2025, 3, 1, 9, 15, 30, 123000, tzinfo=timezone.utc)
        naive = datetime(2025, 3, 1, 9, 15, 30, 123000)

        assert format_timestamp(aware) == format_timestamp(naive)

    def test_other_timezones_are_converted(self):
        ist = timezone(timedelta(hours=5, minutes=30))
        local = datetime(2025, 3, 1, 14, 45, 30, 123000, tzinfo=ist)

        assert format_timestamp(local) == "2025-03-01_09-15-30-123"

    def test_url_and_file_path_share_the_filename(self):
        created_at = datetime(2025, 3, 1, 9, 15, 30, 123000)

        assert invoice_url(7, created_at) == "/invoices/invoice-7-2025-03-01_09-15-30-123.pdf"
        assert invoice_file_path(7, created_at) == Path(settings.INVOICE_DIR) / "invoice-7-2025-03-01_09-15-30-123.pdf"

    def test_bill_exposes_derived_pdf_path(self):
        bill = build_bill()

        assert bill.pdf_path == "/invoices/invoice-42-2025-03-01_09-15-30-123.pdf"


class TestInvoiceRenderer:

    def test_money_uses_two_decimals(self):
        assert money(Decimal("20")) == "20.00"
        assert money(Decimal("150.5")) == "150.50"
        assert money(0) == "0.00"

    def test_walk_in_customer_defaults(self):
        details = dict(InvoiceRenderer(build_bill()).details())

        assert details["Customer Name"] == "Walk-in"
        assert details["Customer Phone"] == "N/A"
        assert details["Shop"] == "SkyMart T1"
        assert details["Location"] == "Terminal 1, Gate 4"
        assert details["Cashier"] == "Asha"
        assert details["Payment Method"] == "UPI"
        assert details["Date"] == "2025-03-01 09:15:30 UTC"

    def test_named_customer(self):
        details = dict(InvoiceRenderer(build_bill("Ravi", "9999999999")).details())

        assert details["Customer Name"] == "Ravi"
        assert details["Customer Phone"] == "9999999999"

    def test_item_rows_and_total(self):
        renderer = InvoiceRenderer(build_bill())

        assert renderer.item_rows() == [
            ["Product", "Qty", "Unit Price (INR)", "Line Total (INR)"],
            ["Water Bottle", "2", "20.00", "40.00"],
            ["Sandwich & Chips", "3", "150.50", "451.50"],
        ]
        assert renderer.grand_total() == "Grand Total: INR 491.50"

    def test_render_writes_pdf(self):
        path = render_invoice(build_bill("Ravi <VIP>"))

        assert path.name == "invoice-42-2025-03-01_09-15-30-123.pdf"
        assert path.parent == Path(settings.INVOICE_DIR)
        assert path.read_bytes().startswith(b"%PDF")

    def test_rerender_overwrites_same_file(self):
        first = render_invoice(build_bill())
        second = render_invoice(build_bill())

        assert first == second
        assert len(list(Path(settings.INVOICE_DIR).iterdir())) == 1
