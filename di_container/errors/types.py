"""Specific error types for the container."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Tuple, Union

from .base import ContainerError


def _chain_identifiers(parent_chain: Iterable[Any]) -> Tuple[str, ...]:
    """Normalize a parent chain of ``Parent`` pairs or plain strings to identifiers."""
    return tuple(getattr(parent, "identifier", parent) for parent in parent_chain)


class ConfigurationError(ContainerError):
    """Caller or tooling configuration errors.

    Raised synchronously at the call site, before any instantiation happens.
    """

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[Union[str, Path]] = None,
        field_path: Optional[str] = None,
        invalid_value: Any = None,
        expected_type: Optional[str] = None,
        **kwargs: Any,
    ):
        """Initialize configuration error."""
        kwargs.setdefault("recoverable", False)
        super().__init__(message, **kwargs)

        if config_path:
            self.context.add_detail("config_path", str(config_path))
        if field_path:
            self.context.add_detail("field_path", field_path)
        if invalid_value is not None:
            self.context.add_detail("invalid_value", repr(invalid_value))
        if expected_type:
            self.context.add_detail("expected_type", expected_type)

    @classmethod
    def missing_options(cls, call_site: str, expected: str) -> "ConfigurationError":
        """Create error for a call made without its required options object."""
        error = cls(
            f"{call_site}() requires an options object, but none was given",
            field_path="options",
            expected_type=expected,
            error_code="CONFIG_MISSING_OPTIONS",
        )
        error.with_suggestion(
            f"Pass a {expected}, a mapping with the same fields, or the service identifier"
        )
        return error

    @classmethod
    def invalid_value(
        cls,
        field_path: str,
        value: Any,
        expected: str,
        config_path: Optional[Union[str, Path]] = None,
    ) -> "ConfigurationError":
        """Create error for an invalid configuration value."""
        error = cls(
            f"Invalid value for {field_path}: got {type(value).__name__}, expected {expected}",
            field_path=field_path,
            invalid_value=value,
            expected_type=expected,
            config_path=config_path,
            error_code="CONFIG_INVALID_VALUE",
        )
        error.with_suggestion(f"Ensure {field_path} is a valid {expected}")
        return error


class InstantiationError(ContainerError):
    """Base class for failures while resolving a service."""

    def __init__(
        self,
        message: str,
        *,
        identifier: str,
        parent_chain: Iterable[Any] = (),
        **kwargs: Any,
    ):
        """Initialize instantiation error.

        Args:
            message: Human-readable error message
            identifier: Identifier of the service being resolved
            parent_chain: Ancestors under construction, outermost first
            **kwargs: Passed on to ContainerError
        """
        self.identifier = identifier
        self.parent_chain = _chain_identifiers(parent_chain)
        kwargs.setdefault("recoverable", False)
        super().__init__(self._describe(message), **kwargs)
        self.with_context(identifier=identifier, parent_chain=list(self.parent_chain))

    def _describe(self, message: str) -> str:
        text = f"{message} (identifier: '{self.identifier}'"
        if self.parent_chain:
            text += f", parent chain: {' -> '.join(self.parent_chain)}"
        return text + ")"


class NotRegisteredError(InstantiationError):
    """Raised when a requested identifier has no registration."""

    def __init__(self, identifier: str, **kwargs: Any):
        super().__init__(
            "The service wasn't found in the registry.",
            identifier=identifier,
            **kwargs,
        )
        self.with_suggestion(f"Register '{identifier}' before requesting it")


class MissingConstructorArgumentsError(InstantiationError):
    """Raised when a class registration has no constructor-argument entry."""

    def __init__(self, identifier: str, parent_chain: Iterable[Any] = (), **kwargs: Any):
        super().__init__(
            "Could not find constructor arguments. Have you registered it as a service?",
            identifier=identifier,
            parent_chain=parent_chain,
            **kwargs,
        )


class NoImplementationError(InstantiationError):
    """Raised when a registration is neither class- nor factory-shaped."""

    def __init__(
        self,
        identifier: str,
        parent_chain: Iterable[Any] = (),
        implementation: Any = None,
        **kwargs: Any,
    ):
        super().__init__(
            "No implementation was given!",
            identifier=identifier,
            parent_chain=parent_chain,
            **kwargs,
        )
        if implementation is not None:
            self.with_context(implementation=repr(implementation))
        self.with_suggestion("Register a class, a zero-argument factory or an instance")


class UnresolvedDependencyError(InstantiationError):
    """Raised when a declared dependency has no registration."""

    def __init__(
        self,
        dependency: str,
        identifier: str,
        parent_chain: Iterable[Any] = (),
        **kwargs: Any,
    ):
        self.dependency = dependency
        super().__init__(
            f"Dependency '{dependency}' was not found in the service registry.",
            identifier=identifier,
            parent_chain=parent_chain,
            **kwargs,
        )
        self.with_context(dependency=dependency)
        self.with_suggestion(f"Register '{dependency}' or remove it from the constructor arguments of '{identifier}'")


class LazyReferenceError(InstantiationError):
    """Misuse of a lazy reference handle."""

    @classmethod
    def premature_dereference(cls, identifier: str) -> "LazyReferenceError":
        """Create error for a handle used before its instance exists."""
        error = cls(
            "Lazy reference was dereferenced before its instance finished construction.",
            identifier=identifier,
            error_code="LAZY_REFERENCE_UNFILLED",
        )
        error.with_suggestion(
            "Do not use a circular dependency inside the constructor that receives it"
        )
        return error

    @classmethod
    def already_filled(cls, identifier: str) -> "LazyReferenceError":
        """Create error for a second fill of the same handle."""
        return cls(
            "Lazy reference was already filled.",
            identifier=identifier,
            error_code="LAZY_REFERENCE_FILLED",
        )
