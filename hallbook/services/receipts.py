"""Plain-text receipts, one file per reservation."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from hallbook.domain.models import Reservation

logger = logging.getLogger(__name__)

_TEMPLATE = """\
Reservation Receipt
--------------------
Reservation ID: {r.id}
Name: {r.name}
Company: {r.company}
Hall ID: {r.hall_id}
Start Date: {start}
End Date: {end}
Total Cost: {r.total_cost:.2f} {currency}
--------------------
Generated on: {generated}
"""


def receipt_path(receipt_dir: str | Path, reservation_id: int) -> Path:
    return Path(receipt_dir) / f"receipt_{reservation_id}.txt"


def render_receipt(reservation: Reservation, currency: str, generated_at: datetime) -> str:
    return _TEMPLATE.format(
        r=reservation,
        start=reservation.start_date.strftime("%Y-%m-%d"),
        end=reservation.end_date.strftime("%Y-%m-%d"),
        currency=currency,
        generated=generated_at.strftime("%Y-%m-%d %H:%M:%S"),
    )


def write_receipt(
    reservation: Reservation,
    receipt_dir: str | Path,
    currency: str,
    generated_at: datetime,
) -> Path:
    """Write (or overwrite) the receipt for *reservation* and return its path."""
    path = receipt_path(receipt_dir, reservation.id)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_receipt(reservation, currency, generated_at), encoding="utf-8")
    logger.info("Receipt generated: %s", path)
    return path


def delete_receipt(receipt_dir: str | Path, reservation_id: int) -> bool:
    """Remove a reservation's receipt. Returns False if there was none."""
    path = receipt_path(receipt_dir, reservation_id)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.info("Receipt file deleted: %s", path)
    return True
