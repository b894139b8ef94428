"""Life in Weeks Web Application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from lifeweeks import __version__
from lifeweeks.core.config import settings
from lifeweeks.core.database import create_db_and_tables
from lifeweeks.core.scheduler import shutdown_scheduler, start_scheduler
from lifeweeks.routes import attachments, events, export, files, historical, profile, timeline

# Configure logging
settings.log_dir.mkdir(parents=True, exist_ok=True)
log_file = settings.log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup
    logger.info("Starting Life in Weeks application")
    create_db_and_tables()
    settings.storage_dir.mkdir(parents=True, exist_ok=True)
    start_scheduler()
    yield
    # Shutdown
    shutdown_scheduler()
    logger.info("Life in Weeks application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Record life events on a week-by-week grid from birth to an assumed lifespan",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for external access
origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(profile.router)
app.include_router(events.router)
app.include_router(attachments.router)
app.include_router(files.router)
app.include_router(timeline.router)
app.include_router(historical.router)
app.include_router(export.router)


@app.get("/")
async def root(request: Request):
    """Redirect root to the timeline."""
    rp = request.scope.get("root_path", "")
    return RedirectResponse(f"{rp}/timeline")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
