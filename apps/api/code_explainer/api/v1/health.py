from fastapi import APIRouter

from code_explainer.services.llm.provider import configured_provider

router = APIRouter(tags=["health"])

@router.get("/health")
async def health():
    return {
        "status": "ok",
        "ai_backend": configured_provider(),
    }
