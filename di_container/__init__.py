"""A dependency-injection container that holds services and produces instances of them.

This package provides:
- ``DIContainer`` with singleton and transient registrations
- Constructor injection driven by ordered dependency identifiers
- Lazy references that let mutually dependent services refer to each other
- Decorators declaring constructor arguments on service classes
- Service manifests and a command line tool to inspect and check them
"""

__version__ = "0.1.0"

from loguru import logger

# Silent as a library until configure_logging() opts in
logger.disable("di_container")

from .constants import CONSTRUCTOR_ARGUMENTS_ATTRIBUTE
from .container import DIContainer
from .decorators import get_constructor_arguments, inject, injectable
from .errors import (
    ConfigurationError,
    ContainerError,
    InstantiationError,
    LazyReferenceError,
    MissingConstructorArgumentsError,
    NoImplementationError,
    NotRegisteredError,
    UnresolvedDependencyError,
)
from .lazy import LazyReference, is_lazy_reference, unwrap
from .options import ContainerOptions, GetOptions, HasOptions, RegisterOptions
from .records import (
    FromClass,
    FromFactory,
    FromInstance,
    RegistrationKind,
    RegistrationRecord,
)
from .registry import (
    ConstructorArgumentTable,
    ContainerMaps,
    InstanceCache,
    ServiceRegistry,
)

__all__ = [
    # Container
    "DIContainer",
    "ContainerOptions",
    "ContainerMaps",
    # Options
    "RegisterOptions",
    "GetOptions",
    "HasOptions",
    # Records
    "RegistrationKind",
    "RegistrationRecord",
    "FromClass",
    "FromFactory",
    "FromInstance",
    # Maps
    "ServiceRegistry",
    "ConstructorArgumentTable",
    "InstanceCache",
    # Lazy references
    "LazyReference",
    "is_lazy_reference",
    "unwrap",
    # Decorators
    "inject",
    "injectable",
    "get_constructor_arguments",
    "CONSTRUCTOR_ARGUMENTS_ATTRIBUTE",
    # Errors
    "ContainerError",
    "ConfigurationError",
    "InstantiationError",
    "NotRegisteredError",
    "MissingConstructorArgumentsError",
    "NoImplementationError",
    "UnresolvedDependencyError",
    "LazyReferenceError",
]
