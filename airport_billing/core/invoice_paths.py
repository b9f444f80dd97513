# airport_billing/core/invoice_paths.py
#
# Invoice locations are derived from (bill id, created_at) only, so any
# reader can rebuild them from a fetched bill without an index.

from datetime import datetime, timezone
from pathlib import Path

from airport_billing.core.config import settings


def utc_millis(moment: datetime) -> datetime:
    """Normalise to naive UTC with millisecond precision.

    Naive values are taken to be UTC already (SQLite drops tzinfo on read).
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment.replace(microsecond=(moment.microsecond // 1000) * 1000)


def format_timestamp(moment: datetime) -> str:
    moment = utc_millis(moment)
    # 2025-03-01T09:15:30.123Z -> 2025-03-01_09-15-30-123
    return moment.strftime("%Y-%m-%d_%H-%M-%S-") + f"{moment.microsecond // 1000:03d}"


def invoice_filename(bill_id: int, created_at: datetime) -> str:
    return f"invoice-{bill_id}-{format_timestamp(created_at)}.pdf"


def invoice_url(bill_id: int, created_at: datetime) -> str:
    prefix = settings.INVOICE_URL_PREFIX.rstrip("/")
    return f"{prefix}/{invoice_filename(bill_id, created_at)}"


def invoice_file_path(bill_id: int, created_at: datetime) -> Path:
    return Path(settings.INVOICE_DIR) / invoice_filename(bill_id, created_at)
