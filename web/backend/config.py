#!/usr/bin/env python3
"""
Configuration management for the job portal web application.
"""

from pathlib import Path
from functools import lru_cache

from core.config_loader import AppConfig, load_config
from core.scoring import ScoringCriteria, build_system_default


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.
    
    Loads from YAML file and applies environment variable overrides.
    Result is cached for performance.
    
    Returns:
        AppConfig: The application configuration.
    """
    return load_config(str(get_project_root() / 'config.yaml'))


@lru_cache()
def get_system_default() -> ScoringCriteria:
    """
    Get the system default scoring configuration.

    Built once per process from the built-in rubric and the `scoring`
    section of config.yaml.

    Raises:
        ConfigurationInvalid: If the configured default fails validation.
    """
    scoring = get_config().scoring
    return build_system_default(scoring.system_default, scoring.weight_tolerance)


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent
