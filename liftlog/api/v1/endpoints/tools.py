"""QoL tools: warmup calculator for an explicit working load (pure logic, no DB)."""

from fastapi import APIRouter, Depends, Query

from liftlog.services.warmup import WarmupPlanner, WarmupSetSuggestion, get_warmup_planner

router = APIRouter()


@router.get("/warmup-calculator", response_model=list[WarmupSetSuggestion])
async def warmup_calculator(
    working_load: float | None = Query(None, description="Target working load (kg); default load when omitted or <= 0"),
    sets: int = Query(3, le=100, description="Number of warmup sets"),
    planner: WarmupPlanner = Depends(get_warmup_planner),
):
    """
    Progressive warmup sets leading up to working_load, lightest first.
    Loads are rounded to 2.5 kg (1.25 kg under 20 kg).
    """
    return planner.calculate_warmup_sets(working_load, sets)
