#!/usr/bin/env python3
"""
Job Portal Scoring API - FastAPI Application

PDS scoring configuration, applicant scoring and per-job rankings with
automatic API documentation.

Usage:
    python main.py serve
    
Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException

from core.scoring.exceptions import ScoringError
from .config import get_config
from .exceptions import (
    ServiceException,
    service_exception_handler,
    scoring_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import (
    scoring_router,
    applications_router
)

# Load configuration
config = get_config()

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.logging.level.upper(), logging.INFO),
    format=config.logging.format
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Job Portal Scoring API",
    description="API for PDS-based applicant scoring and ranking",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Register exception handlers
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(ScoringError, scoring_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(scoring_router)
app.include_router(applications_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "pds-scoring"}


def main():
    """Run the web server."""
    import uvicorn
    
    logger.info(f"Starting scoring API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")
    
    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level=config.logging.level.lower()
    )


if __name__ == "__main__":
    main()
