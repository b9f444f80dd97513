"""
Pytest configuration and fixtures for the billing API.

Every test gets its own SQLite file database and invoice directory.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from airport_billing.core.config import settings
from airport_billing.core.jwt import create_access_token
from airport_billing.core.rate_limiter import limiter
from airport_billing.database import Base, get_db
from airport_billing.main import app
from airport_billing.models.bills import Bill
from airport_billing.models.bill_items import BillItem
from airport_billing.models.cashiers import Cashier
from airport_billing.models.products import Product
from airport_billing.models.shops import Shop
from airport_billing.models.vendors import Vendor

limiter.enabled = False


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "INVOICE_DIR", str(tmp_path / "invoices"))
    monkeypatch.setattr(settings, "RESEND_API_KEY", None)


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'billing.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def seed(db_session):
    """Two vendors, one shop each, one cashier in the first shop."""
    vendor = Vendor(company_name="SkyMart", email="vendor@skymart.test")
    other_vendor = Vendor(company_name="Gate Snacks", email="owner@gatesnacks.test")
    db_session.add_all([vendor, other_vendor])
    db_session.flush()

    shop = Shop(name="SkyMart T1", location="Terminal 1, Gate 4", vendor_id=vendor.id)
    other_shop = Shop(name="Gate Snacks T2", location="Terminal 2", vendor_id=other_vendor.id)
    db_session.add_all([shop, other_shop])
    db_session.flush()

    cashier = Cashier(name="Asha", email="asha@skymart.test", shop_id=shop.id)
    water = Product(name="Water Bottle", price=Decimal("20.00"), quantity=10, low_stock_threshold=5, shop_id=shop.id)
    sandwich = Product(name="Sandwich", price=Decimal("150.50"), quantity=8, low_stock_threshold=2, shop_id=shop.id)
    chips = Product(name="Chips", price=Decimal("40.00"), quantity=50, low_stock_threshold=5, shop_id=other_shop.id)
    db_session.add_all([cashier, water, sandwich, chips])
    db_session.commit()

    return SimpleNamespace(
        vendor_id=vendor.id,
        other_vendor_id=other_vendor.id,
        shop_id=shop.id,
        other_shop_id=other_shop.id,
        cashier_id=cashier.id,
        water_id=water.id,
        sandwich_id=sandwich.id,
        chips_id=chips.id,
    )


@pytest.fixture
def cashier(db_session, seed):
    return db_session.get(Cashier, seed.cashier_id)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def cashier_token(seed):
    return create_access_token(seed.cashier_id, "cashier", shop_id=seed.shop_id)


@pytest.fixture
def vendor_token(seed):
    return create_access_token(seed.vendor_id, "vendor")


@pytest.fixture
def other_vendor_token(seed):
    return create_access_token(seed.other_vendor_id, "vendor")


@pytest.fixture
def make_bill(db_session, seed):
    """Insert a bill directly, bypassing checkout, for listing/filter tests."""

    def _make_bill(total, created_at, customer_name=None, shop_id=None):
        total = Decimal(total)
        bill = Bill(
            shop_id=shop_id or seed.shop_id,
            cashier_id=seed.cashier_id,
            total=total,
            customer_name=customer_name,
            payment_method="cash",
            created_at=created_at,
        )
        bill.items = [
            BillItem(
                position=0,
                product_id=seed.water_id,
                product_name="Water Bottle",
                quantity=1,
                unit_price=total,
                line_total=total,
            )
        ]
        db_session.add(bill)
        db_session.commit()
        return bill.id

    return _make_bill


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)
