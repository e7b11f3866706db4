"""Core package - Configuration, logging, exceptions.

This package provides foundational infrastructure used by all other layers.

Modules:
    - config: Environment and configuration management
    - logging: Structured JSON logging
    - exceptions: Custom exception hierarchy
"""

from fieldplan.core.exceptions import (
    ConfigurationError,
    FieldPlanError,
    ImportError_,
    ValidationError,
)

__all__ = [
    "FieldPlanError",
    "ConfigurationError",
    "ValidationError",
    "ImportError_",
]
