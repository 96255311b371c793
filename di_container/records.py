"""Registration records and implementation shapes.

An implementation is classified once, when it is registered, into one of
three shapes:

- ``FromClass``: a constructible class whose positional constructor
  arguments are looked up in the constructor argument table
- ``FromFactory``: a zero-argument callable producing the instance
- ``FromInstance``: an already constructed object

Anything else is rejected with ``NoImplementationError`` before it reaches
the registry.
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, NamedTuple, Type, Union

from .errors import NoImplementationError


class RegistrationKind(Enum):
    """Lifecycle of a registered service."""
    SINGLETON = "singleton"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class FromClass:
    """Implementation built by calling a class with resolved arguments."""
    cls: Type


@dataclass(frozen=True)
class FromFactory:
    """Implementation built by calling a zero-argument factory."""
    factory: Callable[[], Any]


@dataclass(frozen=True)
class FromInstance:
    """Implementation that is already a live object."""
    instance: Any


Implementation = Union[FromClass, FromFactory, FromInstance]


@dataclass(frozen=True)
class RegistrationRecord:
    """How to build the service registered under ``identifier``."""
    identifier: str
    kind: RegistrationKind
    implementation: Implementation

    @property
    def is_singleton(self) -> bool:
        return self.kind is RegistrationKind.SINGLETON

    def describe(self) -> str:
        """Human-readable name of the implementation."""
        implementation = self.implementation
        if isinstance(implementation, FromClass):
            return _qualified_name(implementation.cls)
        if isinstance(implementation, FromFactory):
            return f"{_qualified_name(implementation.factory)}()"
        return f"instance of {_qualified_name(type(implementation.instance))}"


class Parent(NamedTuple):
    """An ancestor on the active resolution path."""
    identifier: str
    reference: Any


def is_class(value: Any) -> bool:
    """Return True if ``value`` is a constructible class."""
    return inspect.isclass(value)


def is_factory(value: Any) -> bool:
    """Return True if ``value`` is a callable that is not a class."""
    return callable(value) and not inspect.isclass(value)


def classify(identifier: str, value: Any) -> Implementation:
    """Wrap a class or factory in its implementation shape.

    Raises:
        NoImplementationError: If ``value`` is neither a class nor a callable
    """
    if is_class(value):
        return FromClass(value)
    if is_factory(value):
        return FromFactory(value)
    raise NoImplementationError(identifier, implementation=value)


def _qualified_name(obj: Any) -> str:
    module = getattr(obj, "__module__", None)
    name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)
    return f"{module}.{name}" if module and module != "builtins" else name
