"""Degradation-only endpoint."""

from fastapi import APIRouter

from deafsim.api.models import DegradationResponse, SimulateRequest
from deafsim.config import normalize_language
from deafsim.hearing import HearingLossSimulator

router = APIRouter()


@router.post("/simulate", response_model=DegradationResponse)
def simulate(request: SimulateRequest):
    """Show what a listener would hear, without calling the model."""
    simulator = HearingLossSimulator(
        level=request.level,
        language=normalize_language(request.language),
        seed=request.seed,
    )
    return DegradationResponse.from_result(simulator.transform(request.text))
