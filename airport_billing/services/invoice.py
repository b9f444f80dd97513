"""
Invoice rendering for completed bills.

One A4 PDF per bill, written to INVOICE_DIR under a name derived only from
the bill id and its creation time (see core.invoice_paths).
"""

import io
import logging
from decimal import Decimal
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.flowables import HRFlowable

from airport_billing.core.config import settings
from airport_billing.core.invoice_paths import invoice_file_path, utc_millis
from airport_billing.models.bills import Bill

logger = logging.getLogger("app")

BRAND = "Airport Inventory Management System"
BRAND_COLOR = colors.HexColor("#007ACC")


def money(value) -> str:
    return f"{Decimal(value):.2f}"


class InvoiceRenderer:
    """Builds the invoice PDF for one persisted bill."""

    MARGIN = 20 * mm

    def __init__(self, bill: Bill):
        self.bill = bill
        self.shop = bill.shop
        self.cashier = bill.cashier
        self.styles = getSampleStyleSheet()
        self._create_custom_styles()

    def _create_custom_styles(self):
        self.brand_style = ParagraphStyle(
            "InvoiceBrand",
            parent=self.styles["Heading1"],
            fontSize=18,
            spaceAfter=6,
            alignment=1,
            textColor=BRAND_COLOR,
            fontName="Helvetica-Bold",
        )

        self.title_style = ParagraphStyle(
            "InvoiceTitle",
            parent=self.styles["Heading2"],
            fontSize=14,
            spaceAfter=12,
            alignment=1,
            textColor=colors.black,
        )

        self.body_style = ParagraphStyle(
            "InvoiceBody",
            parent=self.styles["Normal"],
            fontSize=10,
            spaceAfter=4,
        )

        self.total_style = ParagraphStyle(
            "InvoiceTotal",
            parent=self.styles["Normal"],
            fontSize=13,
            spaceBefore=8,
            alignment=2,
            fontName="Helvetica-Bold",
        )

        self.footer_style = ParagraphStyle(
            "InvoiceFooter",
            parent=self.styles["Normal"],
            fontSize=8,
            alignment=1,
            textColor=colors.grey,
        )

    def details(self) -> list[tuple[str, str]]:
        bill = self.bill
        return [
            ("Bill ID", str(bill.id)),
            ("Date", utc_millis(bill.created_at).strftime("%Y-%m-%d %H:%M:%S UTC")),
            ("Shop", self.shop.name if self.shop else "N/A"),
            ("Location", (self.shop.location if self.shop else None) or "N/A"),
            ("Cashier", self.cashier.name if self.cashier else "N/A"),
            ("Payment Method", (bill.payment_method or "cash").upper()),
            ("Customer Name", bill.customer_name or "Walk-in"),
            ("Customer Phone", bill.customer_phone or "N/A"),
        ]

    def item_rows(self) -> list[list[str]]:
        currency = settings.CURRENCY_LABEL
        rows = [["Product", "Qty", f"Unit Price ({currency})", f"Line Total ({currency})"]]

        for item in self.bill.items:
            rows.append([
                item.product_name,
                str(item.quantity),
                money(item.unit_price),
                money(item.unit_price * item.quantity),
            ])

        return rows

    def grand_total(self) -> str:
        return f"Grand Total: {settings.CURRENCY_LABEL} {money(self.bill.total)}"

    def build_pdf(self) -> bytes:
        buffer = io.BytesIO()

        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=self.MARGIN,
            leftMargin=self.MARGIN,
            topMargin=self.MARGIN,
            bottomMargin=self.MARGIN,
            title=f"Invoice {self.bill.id}",
        )

        story = [
            Paragraph(BRAND, self.brand_style),
            Paragraph("Invoice", self.title_style),
        ]

        for label, value in self.details():
            story.append(Paragraph(f"<b>{label}:</b> {_escape(value)}", self.body_style))

        story.append(Spacer(1, 8 * mm))

        rows = self.item_rows()
        table = Table(rows, colWidths=[75 * mm, 20 * mm, 37 * mm, 38 * mm], repeatRows=1)
        table.setStyle(
            TableStyle([
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("LINEBELOW", (0, 0), (-1, 0), 1, colors.black),
                ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ])
        )
        story.append(table)

        story.append(HRFlowable(width="100%", thickness=1, color=colors.black, spaceBefore=6))
        story.append(Paragraph(self.grand_total(), self.total_style))
        story.append(Spacer(1, 15 * mm))
        story.append(
            Paragraph(
                "Thank you for shopping at Airport Vendor Shops.<br/>"
                f"For queries, contact {settings.SUPPORT_EMAIL}",
                self.footer_style,
            )
        )

        doc.build(story)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes


def render_invoice(bill: Bill) -> Path:
    """Render and store the invoice, returning the file path. Raises on failure."""
    path = invoice_file_path(bill.id, bill.created_at)
    pdf_bytes = InvoiceRenderer(bill).build_pdf()

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(pdf_bytes)

    logger.info(f"Invoice written: {path}")
    return path


def _escape(value: str) -> str:
    # Paragraph text is parsed as mini-markup
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
