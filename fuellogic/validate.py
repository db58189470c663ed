from __future__ import annotations
from typing import Iterable, List

from .types import BillRecord


def delivery_date(bill: BillRecord) -> str:
    """The day a delivery happened: its end date, falling back to its start date."""
    return bill.end_date or bill.start_date


def is_valid_delivery(bill: BillRecord) -> bool:
    return bool(delivery_date(bill)) and bill.quantity > 0


def is_valid_bill(bill: BillRecord) -> bool:
    return bool(bill.start_date) and bool(bill.end_date) and bill.quantity > 0


def valid_bills(bills: Iterable[BillRecord]) -> List[BillRecord]:
    """Drop bills with blank dates or non-positive quantity (silently)."""
    return [b for b in bills if is_valid_bill(b)]


def valid_deliveries(bills: Iterable[BillRecord]) -> List[BillRecord]:
    """Drop deliveries with no date or non-positive quantity (silently)."""
    return [b for b in bills if is_valid_delivery(b)]
