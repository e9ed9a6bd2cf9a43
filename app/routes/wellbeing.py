from __future__ import annotations

from fastapi import APIRouter

from app.schemas.wellbeing import EvaluateRequest, EvaluateResponse, UserEvaluationResponse
from app.services.evaluation_service import evaluate_payloads, evaluate_user

router = APIRouter(prefix="/api/wellbeing")


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate_endpoint(payload: EvaluateRequest) -> EvaluateResponse:
    return EvaluateResponse(**evaluate_payloads(payload.payloads()))


@router.get("/{user_id}", response_model=UserEvaluationResponse)
def user_evaluation_endpoint(user_id: str) -> UserEvaluationResponse:
    return UserEvaluationResponse(**evaluate_user(user_id))
