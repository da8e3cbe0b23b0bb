"""CSV loader — reads and normalizes partner and order data files."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from delivery.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_areas,
    parse_items,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect] | csv.Dialect:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    if not sample:
        return csv.get_dialect("excel")

    first_line = sample.splitlines()[0]
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    return csv.get_dialect("excel")


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_partners(file_path: Path) -> list[dict]:
    """Load and normalize the partners CSV.

    Expected columns (after normalization):
        name, email, phone, status, areas, current_load, shift_start, shift_end, rating
    """
    rows = _read_csv(file_path)
    partners = []
    for row in rows:
        partners.append({
            "name": row.get("name") or "",
            "email": (row.get("email") or "").lower(),
            "phone": row.get("phone") or "",
            "status": (row.get("status") or "active").lower(),
            "areas": parse_areas(row.get("areas") or row.get("area")),
            "current_load": _parse_int(row.get("current_load") or row.get("load")),
            "shift_start": row.get("shift_start"),
            "shift_end": row.get("shift_end"),
            "rating": _parse_float(row.get("rating")),
        })
    logger.info("Parsed %d partners", len(partners))
    return partners


def load_orders(file_path: Path) -> list[dict]:
    """Load and normalize the orders CSV.

    Expected columns (after normalization):
        order_number, customer_name, customer_phone, customer_address, area,
        scheduled_for, items, total_amount
    """
    rows = _read_csv(file_path)
    orders = []
    for row in rows:
        orders.append({
            "order_number": row.get("order_number") or row.get("number"),
            "customer_name": row.get("customer_name") or row.get("customer") or "",
            "customer_phone": row.get("customer_phone") or row.get("phone") or "",
            "customer_address": row.get("customer_address") or row.get("address") or "",
            "area": row.get("area") or "",
            "scheduled_for": row.get("scheduled_for") or row.get("time") or "",
            "items": parse_items(row.get("items")),
            "total_amount": _parse_float(row.get("total_amount") or row.get("total")),
        })
    logger.info("Parsed %d orders", len(orders))
    return orders


def _parse_float(value: str | None) -> float | None:
    """Safely parse a float from a string."""
    if not value:
        return None
    try:
        return float(value.replace(",", ".").strip())
    except (ValueError, AttributeError):
        return None


def _parse_int(value: str | None) -> int:
    if not value:
        return 0
    try:
        # handle "2", "2.0"
        return int(float(str(value).replace(",", ".").strip()))
    except ValueError:
        return 0
