# =========================================================
# STOCK LEDGER
# Every decrement is one conditional UPDATE against the database:
#   quantity = quantity - n  WHERE id = :id AND quantity >= n
# so concurrent checkouts can never push stock below zero, whatever
# the caller's in-memory view of the product says.
# =========================================================

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload

from airport_billing.models.products import Product
from airport_billing.models.shops import Shop
from airport_billing.models.vendors import Vendor
from airport_billing.services.exceptions import InsufficientStock


@dataclass(frozen=True)
class LowStock:
    product_id: int
    product_name: str
    shop_id: int
    shop_name: str
    vendor_name: str | None
    vendor_email: str | None
    remaining: int
    threshold: int


@dataclass(frozen=True)
class Reservation:
    product_id: int
    product_name: str
    shop_id: int
    quantity: int
    unit_price: Decimal
    remaining: int
    low_stock: LowStock | None = None


def reserve_and_decrement(
    db: Session,
    product_id: int,
    quantity: int,
    shop_id: int | None = None,
) -> Reservation:
    """Take ``quantity`` units of a product or raise InsufficientStock.

    The update runs immediately inside the caller's transaction; committing
    or rolling back is up to the caller. When ``shop_id`` is given, products
    of other shops are treated as missing.
    """
    criteria = [Product.id == product_id, Product.quantity >= quantity]
    if shop_id is not None:
        criteria.append(Product.shop_id == shop_id)

    result = db.execute(
        update(Product)
        .where(*criteria)
        .values(quantity=Product.quantity - quantity)
        .execution_options(synchronize_session=False)
    )

    if result.rowcount != 1:
        raise InsufficientStock(product_id, _product_name(db, product_id, shop_id))

    product = (
        db.query(Product)
        .populate_existing()
        .options(joinedload(Product.shop).joinedload(Shop.vendor))
        .filter(Product.id == product_id)
        .one()
    )

    low_stock = None
    if product.quantity <= product.low_stock_threshold:
        low_stock = _low_stock_signal(product)

    return Reservation(
        product_id=product.id,
        product_name=product.name,
        shop_id=product.shop_id,
        quantity=quantity,
        unit_price=Decimal(product.price),
        remaining=product.quantity,
        low_stock=low_stock,
    )


def _product_name(db: Session, product_id: int, shop_id: int | None) -> str | None:
    product = db.query(Product).filter(Product.id == product_id).first()

    if not product:
        return None

    if shop_id is not None and product.shop_id != shop_id:
        return None

    return product.name


def _low_stock_signal(product: Product) -> LowStock:
    shop: Shop = product.shop
    vendor: Vendor | None = shop.vendor if shop else None

    return LowStock(
        product_id=product.id,
        product_name=product.name,
        shop_id=product.shop_id,
        shop_name=shop.name if shop else "N/A",
        vendor_name=vendor.company_name if vendor else None,
        vendor_email=vendor.email if vendor else None,
        remaining=product.quantity,
        threshold=product.low_stock_threshold,
    )
