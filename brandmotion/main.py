from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from slowapi.errors import RateLimitExceeded

from brandmotion.api.router import api_router
from brandmotion.config import get_config, get_settings
from brandmotion.core.logging import get_logger, setup_logging
from brandmotion.core.rate_limit import limiter, rate_limit_exceeded_handler
from brandmotion.jobs.store import InMemoryJobStore
from brandmotion.video.orchestrator import build_orchestrator
from brandmotion.video.presets import build_catalog

settings = get_settings()
config = get_config()
logger = get_logger(__name__)

# Finished videos are served from here
VIDEOS_DIR = Path(settings.output_dir) / "videos"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Startup
    setup_logging()
    VIDEOS_DIR.mkdir(parents=True, exist_ok=True)
    logger.bind(output_dir=settings.output_dir).info("brandmotion_started")
    yield
    # Shutdown: let running exports finish writing
    await app.state.orchestrator.join()


app = FastAPI(
    title="BrandMotion",
    description="Animated brand video builder API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

# Shared services, built once at startup
app.state.catalog = build_catalog()
app.state.job_store = InMemoryJobStore()
app.state.orchestrator = build_orchestrator(config, app.state.catalog, app.state.job_store)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.base_url, "http://localhost:5173"],  # Vite dev server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint for load balancers."""
    return {"status": "healthy"}


@app.get("/output/{filename}")
async def download_output(filename: str) -> FileResponse:
    """Download a finished video as an attachment."""
    path = VIDEOS_DIR / filename
    if Path(filename).name != filename or not path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found",
        )
    return FileResponse(path, media_type="video/mp4", filename=filename)
