from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
import logging

from google.api_core import exceptions as google_exceptions
import groq

from portfolio_interview.config import settings
from portfolio_interview.utils.logging import configure_logging
from portfolio_interview.utils.security import verify_api_key
from portfolio_interview.routers.interview import router as interview_router
from portfolio_interview.routers.companies import router as companies_router
from portfolio_interview.routers.records import router as records_router
from portfolio_interview.services.errors import LLMResponseError
from portfolio_interview.utils.audit import auditor
from portfolio_interview.services.llm_service import llm_service


configure_logging()
auditor.configure(settings.analytics_path)
logger = logging.getLogger(__name__)
app = FastAPI(title="Portfolio Interview Backend", version="0.1.0")

# CORS
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_allow_origins,
	# Wildcard origins require credentials to be False per CORS spec
	allow_credentials=False if settings.cors_allow_origins == ["*"] else True,
	allow_methods=["*"],
	allow_headers=["*"],
	max_age=3600,
)


def _provider_error_response(status) -> JSONResponse:
	if status == 429:
		return JSONResponse({"detail": "LLM rate limit exceeded. Please try again shortly."}, status_code=429)
	if status == 413:
		return JSONResponse({"detail": "The conversation has become too long. Save this interview and start a new one."}, status_code=413)
	return JSONResponse({"detail": "The LLM provider failed to respond."}, status_code=502)


@app.exception_handler(groq.APIError)
async def provider_error(request: Request, exc: groq.APIError) -> JSONResponse:
	logger.error("LLM provider error on %s: %s", request.url.path, exc)
	return _provider_error_response(getattr(exc, "status_code", None))


@app.exception_handler(google_exceptions.GoogleAPICallError)
async def gemini_error(request: Request, exc: google_exceptions.GoogleAPICallError) -> JSONResponse:
	logger.error("Gemini error on %s: %s", request.url.path, exc)
	return _provider_error_response(exc.code)


@app.exception_handler(LLMResponseError)
async def malformed_reply(request: Request, exc: LLMResponseError) -> JSONResponse:
	logger.error("Malformed LLM reply on %s: %s", request.url.path, exc)
	return JSONResponse({"detail": str(exc)}, status_code=502)


@app.get("/health")
async def health() -> JSONResponse:
	return JSONResponse({
		"status": "ok",
		"version": app.version,
		"llm": {"provider": settings.llm_provider, "enabled": llm_service.enabled},
	})


# Routers
_guard = [Depends(verify_api_key)]
app.include_router(interview_router, prefix="/api", tags=["interview"], dependencies=_guard)
app.include_router(companies_router, prefix="/api", tags=["companies"], dependencies=_guard)
app.include_router(records_router, prefix="/api", tags=["records"], dependencies=_guard)


def run() -> None:
	import uvicorn

	uvicorn.run("portfolio_interview.main:app", host=settings.host, port=settings.port)
