"""Projection routes: run the engine on a posted scenario."""

import logging

from fastapi import APIRouter

from immocalc.api.schemas import ProjectionRequest, ProjectionResponse
from immocalc.engine.projection import project

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["projection"])


@router.post("/projection", response_model=ProjectionResponse)
async def run_projection(req: ProjectionRequest) -> ProjectionResponse:
    """Project a scenario. Validation errors are returned as 422 by FastAPI."""
    result = project(req.to_inputs())
    if result.return_metrics.irr is None:
        logger.info("IRR undefined for scenario with price %s", req.purchase_price)
    return ProjectionResponse.model_validate(result)
