"""
Progress Letter - FastAPI Application

Main entry point for the IELTS progress-letter composer.

Architecture:
- Form input events → FormStateStore operations → LetterState snapshot
- LetterState → LetterRenderer → letter text (preview, copy, download)
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__, config
from .routers import letters_router
from .services.form_store import get_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the in-memory session registry on startup."""
    registry = get_registry()
    logger.info(f"Session registry ready (max_sessions={registry.max_sessions})")
    yield

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="IELTS Letter Master",
    description="""
    IELTS Letter Master - Progress Report Letter Composer

    A tutor fills in recipient, subject, one block per student (or student
    group) and a closing; the service renders the finished Vietnamese letter
    as plain text for Zalo or a .txt download.

    ## Pipeline
    1. **Form State Store**: edits → immutable LetterState snapshot
    2. **Renderer**: LetterState → letter text

    ## Key Principles
    - Snapshots are immutable; every edit produces a new one
    - Rendering is pure and deterministic
    - Empty optional fields drop their line, nothing is ever rejected
    - State lives in memory only, per session
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(letters_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "IELTS Letter Master",
        "version": __version__,
        "description": "Progress Report Letter Composer",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# For running with: python -m progress_letter.main
if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host=config.HOST, port=config.PORT)
