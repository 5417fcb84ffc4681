"""
API endpoints for the A/B experiment evaluator.
"""

from fastapi import APIRouter, Depends, Path

from personalization.dependencies import get_experiment_evaluator
from personalization.models.experiment import ExperimentOutcome, ExperimentResults
from personalization.schemas.experiments import ConversionRequest, VariantResponse
from personalization.services.experiment_service import ExperimentEvaluator

router = APIRouter(prefix="/experiments", tags=["experiments"])


@router.get("/variant/{user_id}", response_model=VariantResponse)
async def assign_variant(
    user_id: str = Path(..., description="User ID"),
    evaluator: ExperimentEvaluator = Depends(get_experiment_evaluator),
):
    return VariantResponse(user_id=user_id, variant=evaluator.assign_variant(user_id))


@router.post("/conversions", response_model=VariantResponse)
async def record_conversion(
    request: ConversionRequest,
    evaluator: ExperimentEvaluator = Depends(get_experiment_evaluator),
):
    variant = await evaluator.record_conversion(request.user_id, request.converted)
    return VariantResponse(user_id=request.user_id, variant=variant)


@router.get("/winner", response_model=ExperimentOutcome)
async def get_winner(evaluator: ExperimentEvaluator = Depends(get_experiment_evaluator)):
    """
    Compare variants with a two-proportion z-test.

    Returns reason `insufficient_sample` with no winner until both
    variants have the minimum number of users.
    """
    return evaluator.winner()


@router.get("/results", response_model=ExperimentResults)
async def get_results(evaluator: ExperimentEvaluator = Depends(get_experiment_evaluator)):
    return evaluator.get_results()
