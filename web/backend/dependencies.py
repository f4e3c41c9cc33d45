#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.scoring import ScoringService
from database.repository import PortalRepository
from .config import get_config, get_system_default


class DatabaseManager:
    """Manages database connections and sessions."""
    
    def __init__(self):
        config = get_config()
        self.engine = create_engine(
            config.database.url,
            pool_pre_ping=True,  # Verify connections before using
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )
    
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.
        
        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()


@lru_cache()
def get_db_manager() -> DatabaseManager:
    """Get the process-wide database manager, created on first use."""
    return DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.
    
    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...
    
    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from get_db_manager().get_session()


def get_scoring_service(db: Session = Depends(get_db)) -> ScoringService:
    """FastAPI dependency that builds a ScoringService on the request session."""
    config = get_config()
    return ScoringService(
        PortalRepository(db),
        system_default=get_system_default(),
        tolerance=config.scoring.weight_tolerance
    )
