"""CSV column normalization — handles BOM, trailing spaces, encoding quirks."""

from __future__ import annotations

import re


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Replaces runs of spaces / non-breaking spaces with a single underscore
    - Lowercases
    - Strips non-alphanumeric characters (except underscore)
    """
    name = name.replace("\ufeff", "").strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_areas(raw: str | None) -> list[str]:
    """Parse 'Downtown, Old Town; Harbor' into ['Downtown', 'Old Town', 'Harbor'].

    Area names may contain spaces, so only comma, semicolon and pipe separate
    them. Duplicates are dropped, first occurrence wins.
    """
    if not raw:
        return []
    areas: list[str] = []
    for part in re.split(r"[,;|]", raw):
        part = " ".join(part.split())
        if part and part not in areas:
            areas.append(part)
    return areas


def parse_items(raw: str | None) -> list[dict]:
    """Parse 'Pizza:2:12.50; Cola:1:2' into item dicts.

    Each item is ``name:quantity:price``; quantity defaults to 1 and price
    to 0 when omitted. Malformed numbers raise ValueError.
    """
    if not raw:
        return []
    items = []
    for chunk in raw.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, _, rest = chunk.partition(":")
        qty_raw, _, price_raw = rest.partition(":")
        items.append({
            "name": name.strip(),
            "quantity": int(qty_raw.strip() or 1),
            "price": float(price_raw.strip().replace(",", ".") or 0),
        })
    return items
