from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog
from datetime import datetime
from llmdesk import __version__
from llmdesk.routers import study_router, news_router
from llmdesk.utils.config import settings
from llmdesk.utils.ollama_client import ollama_client
from llmdesk.models import HealthCheckResponse, ErrorResponse

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Create FastAPI application
app = FastAPI(
    title="LLM Desk",
    description="Flashcard and quiz generation with a local LLM, plus stock news sentiment summaries",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify actual origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(study_router.router)
app.include_router(news_router.router)


@app.get("/", response_model=dict)
async def root():
    """Root endpoint with API information"""
    return {
        "message": "LLM Desk API",
        "version": __version__,
        "endpoints": {
            "flashcards": "/flashcards",
            "quiz": "/quiz",
            "news_summary": "/summarize",
            "news_report_pdf": "/summarize/pdf",
            "health": "/health",
            "docs": "/docs"
        }
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Ollama reachability and upstream credential presence"""
    ollama_status = "healthy" if await ollama_client.health_check() else "unhealthy"

    agents_status = {
        "ollama": ollama_status,
        "news_api": "configured" if settings.news_api_key else "missing_api_key",
        "huggingface": "configured" if settings.hf_api_key else "missing_api_key"
    }

    overall_status = "healthy" if ollama_status == "healthy" and all(
        status == "configured" for name, status in agents_status.items() if name != "ollama"
    ) else "degraded"

    return HealthCheckResponse(
        status=overall_status,
        timestamp=datetime.now().isoformat(),
        version=__version__,
        agents_status=agents_status
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Custom HTTP exception handler"""
    logger.warning("HTTP exception occurred",
                   status_code=exc.status_code,
                   detail=exc.detail,
                   path=request.url.path)

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=str(exc.detail),
            error_code=str(exc.status_code)
        ).model_dump()
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """Malformed request bodies are reported as plain 400s"""
    logger.warning("Request validation failed",
                   errors=exc.errors(),
                   path=request.url.path)

    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Invalid request body",
            error_code="400",
            details={"errors": [error.get("msg", "") for error in exc.errors()]}
        ).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """General exception handler"""
    logger.error("Unhandled exception occurred",
                 error=str(exc),
                 path=request.url.path)

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error=str(exc),
            error_code="500"
        ).model_dump()
    )


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting LLM Desk",
                version=__version__,
                debug=settings.debug,
                ollama_model=settings.ollama_model)

    if not settings.news_api_key:
        logger.warning("NEWS_API_KEY is not set; news summaries will fail")
    if not settings.hf_api_key:
        logger.warning("HF_API_KEY is not set; sentiment and summaries fall back to neutral/empty")

    ollama_healthy = await ollama_client.health_check()
    logger.info("Ollama health check", healthy=ollama_healthy)


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down LLM Desk")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
