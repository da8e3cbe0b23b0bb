"""Least-loaded partner within the order's area."""

from __future__ import annotations

from collections.abc import Iterable

from delivery.domain.entities.partner import Partner


def partners_in_area(area: str, candidates: Iterable[Partner]) -> list[Partner]:
    """Keep the candidates that service ``area``, preserving their order."""
    return [p for p in candidates if p.covers(area)]


def pick_least_loaded(candidates: list[Partner]) -> Partner:
    """Pick the candidate with the lowest current load.

    Ties go to the first candidate encountered. Callers pass partners in the
    order they were loaded (ascending id), so equal loads resolve to the
    lowest partner id.

    Raises:
        ValueError: if candidates list is empty.
    """
    if not candidates:
        raise ValueError("Cannot pick from an empty candidate list")

    # min() keeps the first of equal keys
    return min(candidates, key=lambda p: p.current_load)
