from datetime import datetime
from types import SimpleNamespace

from liftlog.services.exercise_history import HistoricalResult
from liftlog.services.session_detail import suggest_warmups, warmup_sets_configured
from liftlog.services.warmup import WarmupConfiguration, WarmupPlanner


class _BrokenPlanner:
    def calculate_from_history(self, loads, count):
        raise ZeroDivisionError("bad curve")


def _planner():
    return WarmupPlanner(
        WarmupConfiguration(load_percentages=(0.5, 0.7, 0.9), reps_per_set=(5, 3, 1), default_working_load=60)
    )


def test_planner_fault_yields_no_suggestions(caplog):
    assert suggest_warmups(_BrokenPlanner(), [], 3) == []
    assert "Warmup calculation failed" in caplog.text


def test_suggestions_follow_most_recent_history_entry():
    history = [
        HistoricalResult(date=datetime(2025, 3, 7), load=120, reps=3),
        HistoricalResult(date=datetime(2025, 3, 5), load=200, reps=1),
    ]
    result = suggest_warmups(_planner(), history, 2)
    # 70% and 90% of 120 kg
    assert [s.load for s in result] == [85.0, 107.5]


def test_warmup_count_comes_from_plan_exercise():
    linked = SimpleNamespace(plan_exercise=SimpleNamespace(warmup_sets=4))
    ad_hoc = SimpleNamespace(plan_exercise=None)
    assert warmup_sets_configured(linked, fallback=3) == 4
    assert warmup_sets_configured(ad_hoc, fallback=3) == 3
