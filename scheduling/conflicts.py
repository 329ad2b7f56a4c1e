"""Overlap detection between appointments sharing a room."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional


def intervals_overlap(
    start: datetime,
    finish: datetime,
    other_start: datetime,
    other_finish: datetime,
) -> bool:
    """Return True if the two intervals intersect.

    Both ends are inclusive: intervals that only share a boundary instant
    (one finishes exactly when the other starts) count as overlapping.
    """
    return not (finish < other_start or start > other_finish)


def find_overlapping(candidate, existing: Iterable) -> Optional[object]:
    """Return the first appointment in ``existing`` that overlaps ``candidate``."""
    for appointment in existing:
        if appointment.overlaps(candidate):
            return appointment
    return None
