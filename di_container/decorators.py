"""Decorators declaring the constructor arguments of a service class.

The container never inspects constructors on its own. Each class-shaped
registration needs an ordered list of dependency identifiers, one per
positional constructor parameter, and these decorators are one way to
declare it next to the class:

    @inject("ILogger", None, "IConfig")
    class Service:
        def __init__(self, logger, retries, config):
            ...

    @injectable
    class Service:
        def __init__(self, logger: "ILogger", retries, config: Config):
            ...

``None`` marks a parameter the container does not inject; it receives
``None``.
"""

import inspect
from typing import Any, Callable, List, Optional, Sequence, Type, TypeVar, overload

from loguru import logger

from .constants import CONSTRUCTOR_ARGUMENTS_ATTRIBUTE
from .errors import ConfigurationError

T = TypeVar("T")

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def validate_arguments(arguments: Sequence[Any], owner: str) -> List[Optional[str]]:
    """Check that every entry is an identifier string or None.

    Raises:
        ConfigurationError: If an entry has any other type
    """
    if isinstance(arguments, (str, bytes)):
        raise ConfigurationError.invalid_value(
            f"{owner} constructor arguments", arguments, "sequence of str or None"
        )
    validated = []
    for position, argument in enumerate(arguments):
        if argument is not None and not (isinstance(argument, str) and argument):
            raise ConfigurationError.invalid_value(
                f"{owner} constructor argument {position}", argument, "non-empty str or None"
            )
        validated.append(argument)
    return validated


def inject(*identifiers: Optional[str]) -> Callable[[Type[T]], Type[T]]:
    """Declare the ordered dependency identifiers of a class.

    Raises:
        ConfigurationError: If an identifier is not a non-empty str or None
    """
    arguments = validate_arguments(identifiers, "inject")

    def decorator(cls: Type[T]) -> Type[T]:
        setattr(cls, CONSTRUCTOR_ARGUMENTS_ATTRIBUTE, tuple(arguments))
        logger.debug(f"Declared constructor arguments for {cls.__name__}: {arguments}")
        return cls

    return decorator


def _annotation_identifier(annotation: Any) -> Optional[str]:
    if annotation is inspect.Parameter.empty:
        return None
    if isinstance(annotation, str):
        return annotation
    return getattr(annotation, "__name__", None)


def extract_arguments(cls: Type) -> List[Optional[str]]:
    """Derive dependency identifiers from the annotations of ``cls.__init__``.

    A string annotation is used verbatim and a class contributes its
    ``__name__``. Unannotated positional parameters map to ``None``;
    ``*args``, ``**kwargs`` and keyword-only parameters are skipped.
    """
    try:
        signature = inspect.signature(cls.__init__)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Cannot inspect the constructor of {cls.__name__}: {e}",
            cause=e,
        )

    arguments = []
    # First parameter is the instance being initialized
    for param in list(signature.parameters.values())[1:]:
        if param.kind not in _POSITIONAL_KINDS:
            continue
        arguments.append(_annotation_identifier(param.annotation))
    return arguments


@overload
def injectable(cls: Type[T]) -> Type[T]: ...


@overload
def injectable(cls: None = None) -> Callable[[Type[T]], Type[T]]: ...


def injectable(cls=None):
    """Declare constructor arguments from the constructor's type annotations.

    Can be used with or without parentheses.
    """
    def decorator(target: Type[T]) -> Type[T]:
        arguments = extract_arguments(target)
        setattr(target, CONSTRUCTOR_ARGUMENTS_ATTRIBUTE, tuple(arguments))
        logger.debug(f"Derived constructor arguments for {target.__name__}: {arguments}")
        return target

    if cls is None:
        return decorator
    return decorator(cls)


def get_constructor_arguments(cls: Type) -> List[Optional[str]]:
    """Read the declared constructor arguments of ``cls``, empty if none."""
    declared = getattr(cls, CONSTRUCTOR_ARGUMENTS_ATTRIBUTE, None)
    if declared is None:
        return []
    return validate_arguments(declared, cls.__name__)
