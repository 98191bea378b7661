"""
Main FastAPI application entry point.
Configures the application, middleware, the push channel, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
from .auth.router import router as auth_router
from .admin.router import router as admin_router
from .clinic_data.router import router as clinic_data_router
from .realtime.router import router as events_router
from .database import SessionLocal, init_db
from .config import settings
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares
from .core.bootstrap import bootstrap_admin_if_needed
from .realtime.dispatcher import EventDispatcher
from .realtime.identity import IdentityResolver
from .realtime.registry import ConnectionRegistry

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting MMGH Admin API...")

    # Create database tables if they don't exist
    init_db()

    db = SessionLocal()
    try:
        bootstrap_admin_if_needed(db)
    except Exception as e:
        logger.error(f"Bootstrap process failed: {str(e)}")
    finally:
        db.close()

    registry = ConnectionRegistry()
    app.state.registry = registry
    app.state.dispatcher = EventDispatcher(registry)
    app.state.identity_resolver = IdentityResolver()

    yield

    registry.close()
    logger.info("MMGH Admin API stopped")

# Create FastAPI application
app = FastAPI(
    title="MMGH Admin API",
    description="Hospital backend with admin-approved registration and real-time notifications",
    version="1.0.0",
    lifespan=lifespan,
)

# Register exception handlers
register_exception_handlers(app)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(clinic_data_router)
app.include_router(events_router)

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Simple welcome message
    """
    return {"message": "Welcome to MMGH Admin API", "version": app.version}

# Health check endpoint
@app.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information, including open event streams
    """
    return {
        "status": "healthy",
        "database": "connected",
        "connections": request.app.state.registry.stats(),
    }
