# =========================================================
# CHECKOUT PIPELINE
#
# 1. Validate the cart (before any stock is touched)
# 2. Decrement stock per line item (conditional UPDATE)
# 3. Persist bill + items in the SAME transaction
# 4. After commit, best-effort side effects:
#    low-stock emails -> realtime broadcast -> invoice PDF
#
# Steps 2-3 are all-or-nothing: a stock rejection or a failed
# bill write rolls back every decrement of the cart.
# Failures in step 4 are logged and never reach the caller.
# =========================================================

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from airport_billing.core.email import send_low_stock_alert
from airport_billing.core.invoice_paths import invoice_url, utc_millis
from airport_billing.core.realtime import broadcaster
from airport_billing.models.bills import Bill
from airport_billing.models.bill_items import BillItem
from airport_billing.models.cashiers import Cashier
from airport_billing.schemas.billing import MAX_LINE_QUANTITY, CheckoutCreate
from airport_billing.services.exceptions import InsufficientStock, InvalidCart, PersistenceFailure
from airport_billing.services.invoice import render_invoice
from airport_billing.services.stock_ledger import LowStock, Reservation, reserve_and_decrement

logger = logging.getLogger("app")

CENT = Decimal("0.01")


@dataclass
class CheckoutResult:
    bill: Bill
    pdf_path: str
    invoice_generated: bool
    low_stock: list[LowStock] = field(default_factory=list)


def _run_now(func: Callable, *args, **kwargs):
    func(*args, **kwargs)


def _validate_cart(cart: CheckoutCreate):
    if not cart.items:
        raise InvalidCart("Bill must contain items")

    for item in cart.items:
        if item.quantity is None or item.quantity <= 0:
            raise InvalidCart("Item quantity must be greater than zero")

        if item.quantity > MAX_LINE_QUANTITY:
            raise InvalidCart(f"Item quantity cannot exceed {MAX_LINE_QUANTITY}")


def checkout(
    db: Session,
    cart: CheckoutCreate,
    cashier: Cashier,
    schedule: Callable | None = None,
) -> CheckoutResult:
    """Turn a cart into a recorded, invoiced bill.

    ``schedule(func, *args)`` runs deferred side effects (low-stock emails);
    the HTTP layer passes ``BackgroundTasks.add_task``. Defaults to calling
    them inline.
    """
    _validate_cart(cart)
    schedule = schedule or _run_now

    reservations: list[Reservation] = []

    try:
        for item in cart.items:
            reservations.append(
                reserve_and_decrement(db, item.product_id, item.quantity, shop_id=cashier.shop_id)
            )

        total = sum(
            (r.unit_price * r.quantity for r in reservations),
            Decimal("0.00"),
        ).quantize(CENT)

        bill = Bill(
            shop_id=reservations[0].shop_id,
            cashier_id=cashier.id,
            total=total,
            customer_name=cart.customer_name or None,
            customer_phone=cart.customer_phone or None,
            payment_method=cart.payment_method,
            created_at=utc_millis(datetime.now(timezone.utc)),
        )
        bill.items = [
            BillItem(
                position=position,
                product_id=r.product_id,
                product_name=r.product_name,
                quantity=r.quantity,
                unit_price=r.unit_price,
                line_total=(r.unit_price * r.quantity).quantize(CENT),
            )
            for position, r in enumerate(reservations)
        ]

        db.add(bill)
        db.commit()

    except InsufficientStock as e:
        db.rollback()
        logger.warning(
            f"Checkout rejected for cashier {cashier.id}: {e.message} "
            f"(product {e.product_id}); {len(reservations)} earlier decrement(s) rolled back"
        )
        raise

    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            f"Bill persistence failed for cashier {cashier.id}, stock changes rolled back: {str(e)}"
        )
        raise PersistenceFailure("Unable to complete billing") from e

    db.refresh(bill)
    logger.info(f"Bill {bill.id} created: shop={bill.shop_id} total={bill.total} items={len(reservations)}")

    low_stock = [r.low_stock for r in reservations if r.low_stock is not None]
    for signal in low_stock:
        schedule(send_low_stock_alert, signal)

    _publish_new_bill(bill)

    invoice_generated = _render_invoice(bill)

    return CheckoutResult(
        bill=bill,
        pdf_path=invoice_url(bill.id, bill.created_at),
        invoice_generated=invoice_generated,
        low_stock=low_stock,
    )


def bill_summary(bill: Bill) -> dict:
    return {
        "billId": bill.id,
        "shopId": bill.shop_id,
        "shopName": bill.shop.name if bill.shop else "N/A",
        "total": float(bill.total),
        "createdAt": utc_millis(bill.created_at).isoformat(timespec="milliseconds") + "Z",
        "customerName": bill.customer_name or "N/A",
    }


def _publish_new_bill(bill: Bill):
    try:
        broadcaster.publish("newBill", bill_summary(bill))
    except Exception as e:
        logger.error(f"Realtime publish failed for bill {bill.id}: {str(e)}")


def _render_invoice(bill: Bill) -> bool:
    try:
        render_invoice(bill)
    except Exception as e:
        logger.error(f"Invoice rendering failed for bill {bill.id}: {str(e)}")
        return False
    return True
