"""
Main FastAPI application entry point.
Sets up the API, middleware, error handling and routes.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.errors import BankCardsError, bank_cards_error_handler
from app.core.logging_config import get_logger, setup_logging
from app.database import engine, Base, SessionLocal
from app.api import auth, cards, transfers, users
from app.services.users import bootstrap_admin

# Register models on Base before creating tables
from app import models  # noqa: F401

logger = get_logger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Configure logging and make sure the administrator account exists.
    """
    setup_logging()
    db = SessionLocal()
    try:
        bootstrap_admin(db, settings)
    finally:
        db.close()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


# Initialize FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc",  # ReDoc UI
    lifespan=lifespan
)

# CORS middleware (allows frontend to call API)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(BankCardsError, bank_cards_error_handler)


@app.get("/")
def root():
    """
    Root endpoint - health check.
    """
    return {
        "message": "Bank Cards API",
        "version": settings.VERSION,
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "auth": f"{settings.API_V1_PREFIX}/auth",
            "users": f"{settings.API_V1_PREFIX}/users",
            "cards": f"{settings.API_V1_PREFIX}/cards",
            "transfers": f"{settings.API_V1_PREFIX}/transfers"
        }
    }


@app.get("/health")
def health_check():
    """
    Health check endpoint for monitoring.
    """
    return {
        "status": "healthy",
        "database": "connected"
    }


# Include API routers
app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
app.include_router(users.router, prefix=settings.API_V1_PREFIX)
app.include_router(cards.router, prefix=settings.API_V1_PREFIX)
app.include_router(transfers.router, prefix=settings.API_V1_PREFIX)
