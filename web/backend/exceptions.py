#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.scoring.exceptions import (
    ScoringError,
    ScoringConfigRejected,
    ConfigurationInvalid,
    JobNotFound,
    CompanyNotFound,
    ApplicantNotFound,
    ProfileInvalid,
)

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class InvalidIdentifierException(ServiceException):
    """Raised when a path identifier is not a valid UUID."""
    pass


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.
    
    Args:
        request: The FastAPI request.
        exc: The service exception.
    
    Returns:
        JSONResponse with error details.
    """
    logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    
    status_code = 500
    if isinstance(exc, InvalidIdentifierException):
        status_code = 400
    
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def scoring_exception_handler(
    request: Request,
    exc: ScoringError
) -> JSONResponse:
    """
    Handle scoring exceptions.

    Rejected configurations return the validation result so the editor can
    show which criteria are enabled and what their weights add up to.
    
    Args:
        request: The FastAPI request.
        exc: The scoring exception.
    
    Returns:
        JSONResponse with error details.
    """
    content = {
        "success": False,
        "error": str(exc),
        "type": exc.__class__.__name__
    }

    if isinstance(exc, (JobNotFound, CompanyNotFound, ApplicantNotFound)):
        status_code = 404
        logger.info(f"Not found in {request.url.path}: {exc}")
    elif isinstance(exc, ScoringConfigRejected):
        status_code = 400
        content["validation"] = exc.result.to_dict()
        logger.info(f"Rejected scoring configuration in {request.url.path}: {exc}")
    elif isinstance(exc, ProfileInvalid):
        status_code = 422
        content["details"] = list(exc.errors)
        logger.warning(f"Malformed applicant profile in {request.url.path}: {exc}")
    elif isinstance(exc, ConfigurationInvalid):
        status_code = 400
        logger.warning(f"Invalid scoring configuration in {request.url.path}: {exc}")
    else:
        status_code = 500
        logger.error(f"Scoring error in {request.url.path}: {exc}", exc_info=True)

    return JSONResponse(status_code=status_code, content=content)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    
    Args:
        request: The FastAPI request.
        exc: The HTTP exception.
    
    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    
    Args:
        request: The FastAPI request.
        exc: The exception.
    
    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
