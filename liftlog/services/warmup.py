"""Warmup planner: progressive warmup sets leading up to a working load.

The curve is a list of percentages of the working load, each paired with a rep
count. Asking for fewer sets than the curve holds keeps the heaviest steps, so a
short warmup still ends close to working weight. Loads are snapped to plate
increments and fixed to one decimal place.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, model_validator

from liftlog.core.config import Settings, get_settings
from liftlog.core.constants import FINE_LOAD_INCREMENT_KG
from liftlog.services.load_math import round_to_equipment, to_one_decimal

logger = logging.getLogger(__name__)


class WarmupConfiguration(BaseModel):
    """Immutable warmup curve. load_percentages[i] is performed for reps_per_set[i]."""

    model_config = ConfigDict(frozen=True)

    load_percentages: tuple[float, ...]
    reps_per_set: tuple[int, ...]
    default_working_load: float = Field(gt=0)

    @model_validator(mode="after")
    def _check_curve(self) -> "WarmupConfiguration":
        if len(self.load_percentages) != len(self.reps_per_set):
            raise ValueError("load_percentages and reps_per_set must have the same length")
        if any(not 0 < p <= 1 for p in self.load_percentages):
            raise ValueError("load_percentages must be fractions in (0, 1]")
        if list(self.load_percentages) != sorted(self.load_percentages):
            raise ValueError("load_percentages must be ascending")
        if any(r < 1 for r in self.reps_per_set):
            raise ValueError("reps_per_set must be positive")
        return self


class WarmupSetSuggestion(BaseModel):
    """One suggested warmup set."""

    model_config = ConfigDict(frozen=True)

    load: float
    reps: int
    percentage: int


def warmup_configuration_from_settings(settings: Settings) -> WarmupConfiguration:
    return WarmupConfiguration(
        load_percentages=tuple(settings.warmup_load_percentages),
        reps_per_set=tuple(settings.warmup_reps_per_set),
        default_working_load=settings.warmup_default_working_load,
    )


class WarmupPlanner:
    """Computes warmup suggestions from an explicit working load or from recent history."""

    def __init__(self, config: WarmupConfiguration):
        self.config = config
        logger.info(
            "Warmup planner ready: percentages=%s reps=%s default_load=%skg",
            list(config.load_percentages),
            list(config.reps_per_set),
            config.default_working_load,
        )

    def calculate_warmup_sets(
        self,
        working_load: float | None,
        number_of_warmup_sets: int,
    ) -> list[WarmupSetSuggestion]:
        """
        Warmup sets for working_load, lightest first.
        Missing or non-positive working_load falls back to the configured default.
        Zero or negative set counts return []; counts beyond the curve return the whole curve.
        """
        if not number_of_warmup_sets or number_of_warmup_sets <= 0:
            logger.debug("No warmup sets requested")
            return []

        effective_load = self._effective_working_load(working_load)
        percentages, reps = self._select_steps(number_of_warmup_sets)
        logger.debug("Calculating %d warmup sets for working load %skg", len(percentages), effective_load)

        suggestions = []
        for percentage, step_reps in zip(percentages, reps):
            load = round_to_equipment(effective_load * percentage)
            # Very light targets can round to nothing; the smallest plate is the floor.
            load = max(load, FINE_LOAD_INCREMENT_KG)
            suggestions.append(
                WarmupSetSuggestion(
                    load=to_one_decimal(load),
                    reps=step_reps,
                    percentage=int(math.floor(percentage * 100 + 0.5)),
                )
            )
        return suggestions

    def calculate_from_history(
        self,
        recent_working_loads: Sequence[float] | None,
        number_of_warmup_sets: int,
    ) -> list[WarmupSetSuggestion]:
        """Warmup sets seeded by the most recent load (loads are most recent first); older loads are ignored."""
        if not recent_working_loads:
            logger.debug("No history available, using default working load")
            return self.calculate_warmup_sets(None, number_of_warmup_sets)
        return self.calculate_warmup_sets(recent_working_loads[0], number_of_warmup_sets)

    def _effective_working_load(self, working_load: float | None) -> float:
        if working_load is None or isinstance(working_load, bool):
            return self.config.default_working_load
        try:
            load = float(working_load)
        except (TypeError, ValueError):
            return self.config.default_working_load
        if not math.isfinite(load) or load <= 0:
            return self.config.default_working_load
        return load

    def _select_steps(self, number_of_warmup_sets: int) -> tuple[Sequence[float], Sequence[int]]:
        """Last N steps of the curve (the heaviest ones), still in ascending order."""
        if number_of_warmup_sets >= len(self.config.load_percentages):
            return self.config.load_percentages, self.config.reps_per_set
        return (
            self.config.load_percentages[-number_of_warmup_sets:],
            self.config.reps_per_set[-number_of_warmup_sets:],
        )


@lru_cache
def get_warmup_planner() -> WarmupPlanner:
    """Process-wide planner built from settings (FastAPI dependency)."""
    return WarmupPlanner(warmup_configuration_from_settings(get_settings()))
