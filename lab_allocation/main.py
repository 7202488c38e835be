# /lab_allocation/main.py

import logging
from contextlib import asynccontextmanager

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.deps import get_current_admin
from .db.database import init_db

# --- Application-specific Router Imports ---
from .routers import (
    auth_router,
    computers_router,
    students_router,
    allocations_router,
    dashboard_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.API_TITLE} v{settings.API_VERSION}")
    init_db()
    yield
    logger.info("Application shutting down")


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
# Login is the only /api route reachable without a session token.
admin_only = [Depends(get_current_admin)]

app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"], dependencies=admin_only)
app.include_router(computers_router.router, prefix="/api/computers", tags=["Computers"], dependencies=admin_only)
app.include_router(students_router.router, prefix="/api/students", tags=["Students"], dependencies=admin_only)
app.include_router(allocations_router.router, prefix="/api/allocations", tags=["Allocations"], dependencies=admin_only)


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Lab Allocation API is running!", "version": app.version}
