"""
Workflow Designer - FastAPI Application Entry Point.

Backend for a visual HR workflow designer: validates workflow graphs,
simulates them step by step and keeps saved workflows in memory.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from designer.config import settings
from designer.api.routes import automations, simulation, workflows
from designer.workflows.onboarding import DEMO_WORKFLOW_ID, register_onboarding_workflow


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    if settings.REGISTER_DEMO_WORKFLOW:
        await register_onboarding_workflow()

    yield

    # Shutdown
    logger.info("Shutting down...")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## Workflow Designer API

Validation and dry-run simulation for HR workflows built from
start, task, approval, automated and end steps.

### Features
- **Validation**: Structural errors (missing start, cycles, bad edges) and advisory warnings
- **Simulation**: Step-by-step trace of what each node would do, in topological order
- **Automations**: Catalog of automated actions and their parameters
- **Storage**: Save, list, replace and delete workflows

### Quick Start
1. List automated actions: `GET /automations`
2. Validate a workflow: `POST /validate`
3. Simulate it: `POST /simulate`
4. Save it and run it in the sandbox: `POST /workflows`, then `POST /workflows/{workflow_id}/test`

### Demo Workflow
A pre-registered Employee Onboarding workflow is available with ID: `onboarding-demo`
    """,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(simulation.router)
app.include_router(automations.router)
app.include_router(workflows.router)


# ============================================================
# Root Endpoints
# ============================================================

@app.get("/", tags=["Root"])
async def root():
    """API root - returns basic info and links."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": "Validation and simulation backend for an HR workflow designer",
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": {
            "validate": "/validate",
            "simulate": "/simulate",
            "automations": "/automations",
            "workflows": "/workflows",
            "sandbox": "/workflows/{workflow_id}/test",
        },
        "demo_workflow": DEMO_WORKFLOW_ID,
    }


@app.get("/health", tags=["Root"])
async def health():
    """Health check endpoint."""
    from designer.automations import automation_catalog
    from designer.storage.memory import workflow_storage

    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "workflows_count": len(workflow_storage),
        "automations_count": len(automation_catalog),
    }


# ============================================================
# Error Handlers
# ============================================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.exception(f"Unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "detail": str(exc) if settings.DEBUG else "An unexpected error occurred",
        },
    )
