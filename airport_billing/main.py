# Main application file

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from airport_billing.database import engine, Base
from airport_billing.core.rate_limiter import limiter
from airport_billing.core.config import settings
from airport_billing.core.realtime import broadcaster
from airport_billing.models import vendors, shops, cashiers, products, bills, bill_items  # noqa: F401
from airport_billing.routers import billing, realtime
from airport_billing.services.exceptions import CheckoutError


# LOGGING CONFIGURATION

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("app")


# STARTUP / SHUTDOWN

@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    Path(settings.INVOICE_DIR).mkdir(parents=True, exist_ok=True)
    broadcaster.bind(asyncio.get_running_loop())
    yield
    broadcaster.bind(None)


# APP INIT

app = FastAPI(
    title="Airport Inventory Billing API",
    description="Point-of-sale billing for vendor shops inside the airport",
    version="1.0.0",
    lifespan=lifespan,
)


# CORS (Token-based auth)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Authorization", "Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# CHECKOUT ERRORS

async def checkout_error_handler(request: Request, exc: CheckoutError):
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})

app.add_exception_handler(CheckoutError, checkout_error_handler)


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(billing.router)
app.include_router(realtime.router)


# INVOICE FILES

app.mount(
    settings.INVOICE_URL_PREFIX,
    StaticFiles(directory=settings.INVOICE_DIR, check_dir=False),
    name="invoices",
)


# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "Airport Inventory Billing API is running"}
