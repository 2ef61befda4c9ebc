from fastapi import APIRouter, Depends

from code_explainer.schemas.explain import (
    DetectRequest,
    DetectResponse,
    ExplainRequest,
    ErrorResponse,
    ExplainResponse,
    ReviewRequest,
)
from code_explainer.services.analysis.language import detect_language
from code_explainer.services.explain.models import CodeSample, ExplanationResult
from code_explainer.services.explain.orchestrator import ExplanationOrchestrator

router = APIRouter(tags=["explain"])

BAD_REQUEST = {400: {"model": ErrorResponse}}

def get_orchestrator() -> ExplanationOrchestrator:
    return ExplanationOrchestrator()

def _to_response(result: ExplanationResult) -> ExplainResponse:
    return ExplainResponse(
        explanation=result.body,
        source_mode=result.source_mode.value,
        note=result.note,
    )

@router.post("/explain", response_model=ExplainResponse, response_model_exclude_none=True, responses=BAD_REQUEST)
async def explain_code(payload: ExplainRequest, orchestrator: ExplanationOrchestrator = Depends(get_orchestrator)):
    sample = CodeSample(
        text=payload.code,
        declared_language=payload.language or None,
        path=payload.path or None,
    )
    result = await orchestrator.explain(sample, question=payload.question or None)
    return _to_response(result)

@router.post("/review", response_model=ExplainResponse, response_model_exclude_none=True, responses=BAD_REQUEST)
async def review_code(payload: ReviewRequest, orchestrator: ExplanationOrchestrator = Depends(get_orchestrator)):
    sample = CodeSample(
        text=payload.code,
        declared_language=payload.language or None,
        path=payload.path or None,
    )
    result = await orchestrator.review(sample)
    return _to_response(result)

@router.post("/detect", response_model=DetectResponse, responses=BAD_REQUEST)
async def detect(payload: DetectRequest):
    return DetectResponse(language=detect_language(payload.code, payload.path).value)
