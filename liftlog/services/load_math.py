"""Load rounding and set selection helpers shared by warmup planning and history."""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from liftlog.core.constants import (
    FINE_INCREMENT_BELOW_KG,
    FINE_LOAD_INCREMENT_KG,
    LOAD_INCREMENT_KG,
)


class LoadedSet(Protocol):
    load: float
    reps: int


def round_to_increment(load: float, increment: float) -> float:
    """Nearest multiple of increment; halves round up (61.25 -> 62.5 at 2.5)."""
    return math.floor(load / increment + 0.5) * increment


def round_to_equipment(load: float) -> float:
    """Snap to 2.5 kg plates, or 1.25 kg micro plates for loads under 20 kg."""
    increment = FINE_LOAD_INCREMENT_KG if load < FINE_INCREMENT_BELOW_KG else LOAD_INCREMENT_KG
    return round_to_increment(load, increment)


def to_one_decimal(value: float) -> float:
    """Fix to one decimal place, half up (11.25 -> 11.3)."""
    return float(Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def best_set(sets: Iterable[LoadedSet]) -> LoadedSet | None:
    """Heaviest set; equal loads are broken by more reps. First one wins a full tie."""
    best = None
    for candidate in sets:
        if best is None or (candidate.load, candidate.reps) > (best.load, best.reps):
            best = candidate
    return best
