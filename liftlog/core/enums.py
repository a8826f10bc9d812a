"""Shared enums for models and API."""

from enum import Enum


class SetType(str, Enum):
    """Whether a logged set was preparation or training."""

    WARMUP = "warmup"
    WORKING = "working"


class SessionStatus(str, Enum):
    """Lifecycle of a workout session. Only in_progress is non-terminal."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class IntensityTechnique(str, Enum):
    """Intensity technique applied to a plan exercise."""

    DROP_SET = "drop_set"
    PAUSE = "pause"
    PARTIAL_LENGTH = "partial_length"
    FAIL = "fail"
    SUPERSET = "superset"
    NA = "N/A"
