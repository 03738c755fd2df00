"""Investment score routes."""

from fastapi import APIRouter, Depends

from propfolio.api.deps import get_scoring_policy
from propfolio.api.schemas import ScoreRequest, ScoreResponse
from propfolio.engine.investment import calculate_investment_metrics
from propfolio.engine.scoring import calculate_legacy_score
from propfolio.models.policy import ScoringPolicy

router = APIRouter(prefix="/api/v1", tags=["scores"])


@router.post("/scores", response_model=ScoreResponse)
async def score_property(req: ScoreRequest, policy: ScoringPolicy = Depends(get_scoring_policy)):
    """Hold/flip scores, breakdowns, financing figures and target inputs."""
    return ScoreResponse(
        legacy_score=calculate_legacy_score(req.property, policy),
        metrics=calculate_investment_metrics(req.property, policy),
    )
