# =========================================================
# BILLING ROUTER
#
# CASHIERS:
# - Create bills (checkout)
# - List their own bills
#
# VENDORS:
# - List bills of their shops, with filters
# - List bills of one shop
#
# Both can regenerate a missing invoice PDF
# =========================================================

import logging
from datetime import date, datetime
from decimal import Decimal

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session, joinedload

from airport_billing.core.auth import Principal, require_roles
from airport_billing.core.config import settings
from airport_billing.core.rate_limiter import limiter
from airport_billing.database import get_db
from airport_billing.models.bills import Bill
from airport_billing.models.cashiers import Cashier
from airport_billing.models.shops import Shop
from airport_billing.schemas.billing import (
    BillResponse,
    CheckoutCreate,
    CheckoutResponse,
    InvoiceResponse,
)
from airport_billing.services.checkout import checkout
from airport_billing.services.invoice import render_invoice

router = APIRouter(prefix="/billing", tags=["Billing"])

logger = logging.getLogger("app")


def _get_cashier(db: Session, principal: Principal) -> Cashier:
    cashier = db.query(Cashier).filter(Cashier.id == principal.id).first()

    if cashier is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Cashier not found",
        )

    return cashier


def _shop_ids_for(db: Session, principal: Principal) -> list[int]:
    if principal.role == "vendor":
        return [
            shop_id
            for (shop_id,) in db.query(Shop.id).filter(Shop.vendor_id == principal.id).all()
        ]

    if principal.shop_id is not None:
        return [principal.shop_id]

    return [_get_cashier(db, principal).shop_id]


def _bills_query(db: Session):
    return db.query(Bill).options(joinedload(Bill.items))


# =========================================================
# CHECKOUT
# =========================================================
@router.post("", response_model=CheckoutResponse)
@limiter.limit(settings.CHECKOUT_RATE_LIMIT)
def create_bill(
    request: Request,
    cart: CheckoutCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles("cashier")),
):
    cashier = _get_cashier(db, principal)

    # InsufficientStock / PersistenceFailure are turned into {"msg": ...} by the app handler
    result = checkout(db, cart, cashier, schedule=background_tasks.add_task)

    if result.invoice_generated:
        msg = "Billing successful. Invoice generated."
    else:
        msg = "Billing successful. Invoice generation failed, regenerate it later."

    return CheckoutResponse(
        msg=msg,
        bill_id=result.bill.id,
        pdf_path=result.pdf_path,
        invoice_generated=result.invoice_generated,
    )


# =========================================================
# CASHIER BILLS
# =========================================================
@router.get("/cashier", response_model=list[BillResponse])
def list_cashier_bills(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles("cashier")),
):
    return (
        _bills_query(db)
        .filter(Bill.cashier_id == principal.id)
        .order_by(Bill.created_at.desc(), Bill.id.desc())
        .all()
    )


# =========================================================
# VENDOR / CASHIER SHOP BILLS (FILTERED)
# =========================================================
@router.get("/vendor", response_model=list[BillResponse])
def list_vendor_bills(
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    customer_name: str | None = Query(None, alias="customerName"),
    min_amount: Decimal | None = Query(None, alias="minAmount", ge=0),
    max_amount: Decimal | None = Query(None, alias="maxAmount", ge=0),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles("vendor", "cashier")),
):
    shop_ids = _shop_ids_for(db, principal)

    if not shop_ids:
        return []

    query = _bills_query(db).filter(Bill.shop_id.in_(shop_ids))

    if start_date:
        query = query.filter(Bill.created_at >= datetime.combine(start_date, datetime.min.time()))

    if end_date:
        query = query.filter(Bill.created_at <= datetime.combine(end_date, datetime.max.time()))

    if customer_name:
        # Literal substring match: % and _ typed by the user are not wildcards
        pattern = customer_name.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        query = query.filter(Bill.customer_name.ilike(f"%{pattern}%", escape="\\"))

    if min_amount is not None:
        query = query.filter(Bill.total >= min_amount)

    if max_amount is not None:
        query = query.filter(Bill.total <= max_amount)

    return query.order_by(Bill.created_at.desc(), Bill.id.desc()).all()


# =========================================================
# SINGLE SHOP BILLS
# =========================================================
@router.get("/shop/{shop_id}", response_model=list[BillResponse])
def list_shop_bills(
    shop_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles("vendor")),
):
    shop = (
        db.query(Shop)
        .filter(
            Shop.id == shop_id,
            Shop.vendor_id == principal.id,
        )
        .first()
    )

    if not shop:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shop not found",
        )

    return (
        _bills_query(db)
        .filter(Bill.shop_id == shop.id)
        .order_by(Bill.created_at.desc(), Bill.id.desc())
        .all()
    )


# =========================================================
# INVOICE REGENERATION
# =========================================================
@router.post("/{bill_id}/invoice", response_model=InvoiceResponse)
def regenerate_invoice(
    bill_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles("vendor", "cashier")),
):
    bill = (
        _bills_query(db)
        .filter(
            Bill.id == bill_id,
            Bill.shop_id.in_(_shop_ids_for(db, principal)),
        )
        .first()
    )

    if not bill:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bill not found",
        )

    try:
        render_invoice(bill)
    except Exception as e:
        logger.error(f"Invoice regeneration failed for bill {bill.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to write invoice",
        )

    return InvoiceResponse(
        msg="Invoice generated",
        bill_id=bill.id,
        pdf_path=bill.pdf_path,
    )
