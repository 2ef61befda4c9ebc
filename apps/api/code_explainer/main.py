from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from code_explainer.core.config import settings
from code_explainer.core.logging import setup_logging
from code_explainer.services.ingestion.github_client import GitHubAPIError

from code_explainer.api.v1.health import router as health_router
from code_explainer.api.v1.explain import router as explain_router
from code_explainer.api.v1.github import router as github_router

logger = setup_logging()

def _validation_message(exc: RequestValidationError) -> str:
    for err in exc.errors():
        loc = err.get("loc", ())
        if "code" in loc:
            return "Missing code"
        if loc:
            return f"Invalid {loc[-1]}"
    return "Invalid request"

def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME)

    @app.exception_handler(HTTPException)
    async def _http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(GitHubAPIError)
    async def _github_error(request: Request, exc: GitHubAPIError):
        logger.warning(f"GitHub fetch failed for {request.url.path}: {exc.status_code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "status": exc.status_code})

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error"})

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(explain_router, prefix="/api/v1")
    app.include_router(github_router, prefix="/api/v1")

    logger.info(f"{settings.APP_NAME} ready (env={settings.ENV})")
    return app

app = create_app()
