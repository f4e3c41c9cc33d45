#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

import uuid

from .exceptions import InvalidIdentifierException


def parse_uuid(value: str, name: str = "id") -> uuid.UUID:
    """
    Parse a path identifier as a UUID.
    
    Args:
        value: Raw identifier from the request.
        name: Parameter name used in the error message.
    
    Returns:
        Parsed UUID.
    
    Raises:
        InvalidIdentifierException: If the value is not a valid UUID.
    """
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise InvalidIdentifierException(
            f"Invalid {name} format: {value}. Must be a valid UUID."
        )
