"""API route handlers."""

from .scoring import router as scoring_router
from .applications import router as applications_router
