import logging
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .agents.summarizer import SummarizerAgent
from .config import get_settings
from .logging_config import configure_logging
from .models.schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse, HealthResponse
from .services.orchestrator import InvalidURLListError, LinkAnalysisOrchestrator
from .services.page_fetcher import PageFetcher
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)

INVALID_URLS_MESSAGE = "Please provide an array of URLs to analyze"

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Link Summary Service v%s", app.version)
    if not settings.has_api_key:
        logger.warning("GEMINI_API_KEY is not set; summaries will use a fallback message")
    yield
    logger.info("Shutting down Link Summary Service")

app = FastAPI(
    title="Link Summary Service",
    description="Fetches web pages and summarizes each one in exactly seven words using Gemini.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

page_fetcher_singleton = PageFetcher(settings)
summarizer_agent_singleton = SummarizerAgent(settings)
orchestrator_singleton = LinkAnalysisOrchestrator(
    settings,
    page_fetcher_singleton,
    summarizer_agent_singleton,
)


def get_orchestrator() -> LinkAnalysisOrchestrator:
    return orchestrator_singleton


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": INVALID_URLS_MESSAGE},
    )


@app.exception_handler(InvalidURLListError)
async def invalid_urls_handler(request: Request, exc: InvalidURLListError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s %s", request.method, request.url, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred."},
    )


ANALYZE_SUCCESS_EXAMPLE = {
    "results": {
        "https://example.com": {
            "status": "success",
            "summary": "Example domain reserved for documentation and testing",
        },
        "https://unreachable.invalid": {
            "status": "error",
            "error": "timeout of 10000ms exceeded",
            "summary": "Could not access or analyze this site",
        },
    }
}

ANALYZE_INVALID_EXAMPLE = {
    "error": INVALID_URLS_MESSAGE,
}


@app.get("/", tags=["Health"], response_class=PlainTextResponse)
def read_root() -> str:
    return "Link summary server is running! Send POST requests to /analyze"


@app.get("/health", tags=["Health"], response_model=HealthResponse)
async def health_check() -> Dict[str, Any]:
    return {"status": "ok", "version": app.version}


@app.post(
    "/analyze",
    response_model=AnalyzeResponse,
    response_model_exclude_none=True,
    summary="Summarize URLs",
    description="Fetch up to 10 URLs in parallel and summarize each page in seven words.",
    responses={
        200: {
            "description": "Per-URL results; individual failures are reported inline.",
            "content": {"application/json": {"example": ANALYZE_SUCCESS_EXAMPLE}},
        },
        400: {
            "model": ErrorResponse,
            "description": "Missing, empty or malformed urls field.",
            "content": {"application/json": {"example": ANALYZE_INVALID_EXAMPLE}},
        },
    },
)
async def analyze_urls(
    payload: AnalyzeRequest,
    orchestrator: LinkAnalysisOrchestrator = Depends(get_orchestrator),
) -> AnalyzeResponse:
    logger.info("Received analysis request for %s URLs", len(payload.urls or []))
    results = await orchestrator.analyze(payload.urls)
    return AnalyzeResponse(results=results)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "link_summarizer.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
