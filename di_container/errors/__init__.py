"""Error handling for di-container.

This module provides:
- A base error type with rich context and suggestions
- Configuration errors raised at registration and retrieval call sites
- Instantiation errors raised while resolving a service graph
"""

from .base import ContainerError, ErrorCause, ErrorContext, ErrorOrigin
from .types import (
    ConfigurationError,
    InstantiationError,
    LazyReferenceError,
    MissingConstructorArgumentsError,
    NoImplementationError,
    NotRegisteredError,
    UnresolvedDependencyError,
)

__all__ = [
    # Base classes
    "ContainerError",
    "ErrorContext",
    "ErrorOrigin",
    "ErrorCause",
    # Specific error types
    "ConfigurationError",
    "InstantiationError",
    "NotRegisteredError",
    "MissingConstructorArgumentsError",
    "NoImplementationError",
    "UnresolvedDependencyError",
    "LazyReferenceError",
]
