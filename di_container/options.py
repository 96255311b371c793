"""Options objects accepted by the container.

Registration and retrieval calls require an options object naming the
service. Callers may pass the model itself, a mapping with the same fields,
or just the identifier string.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from .errors import ConfigurationError
from .registry import ContainerMaps

M = TypeVar("M", bound="IdentifierOptions")


class IdentifierOptions(BaseModel):
    """Options naming a single service."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identifier: str

    @field_validator("identifier")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("identifier must be a non-empty string")
        return value


class GetOptions(IdentifierOptions):
    """Options for ``DIContainer.get``."""


class HasOptions(IdentifierOptions):
    """Options for ``DIContainer.has``."""


class RegisterOptions(IdentifierOptions):
    """Options for ``register_singleton`` and ``register_transient``.

    Attributes:
        identifier: Service identifier
        implementation: Class or zero-argument factory, overrides the
            positional implementation passed to the register call
        instance: Already constructed object, singleton registrations only
        arguments: Constructor arguments, overrides the class's declared ones
    """

    implementation: Optional[Any] = None
    instance: Optional[Any] = None
    arguments: Optional[List[Optional[str]]] = None

    @model_validator(mode="after")
    def _single_source(self) -> "RegisterOptions":
        if self.implementation is not None and self.instance is not None:
            raise ValueError("implementation and instance are mutually exclusive")
        return self


@dataclass(frozen=True)
class ContainerOptions:
    """Construction-time options of a container.

    Attributes:
        custom_container_maps: Storage replacing the default dicts; the
            container shares it with whoever supplied it
    """
    custom_container_maps: Optional[ContainerMaps] = None


def coerce_options(
    options: Union[M, Mapping[str, Any], str, None],
    model: Type[M],
    call_site: str,
) -> M:
    """Turn the ``options`` argument of a container call into ``model``.

    Raises:
        ConfigurationError: If options are missing or invalid
    """
    if options is None:
        raise ConfigurationError.missing_options(call_site, model.__name__)
    if isinstance(options, model):
        return options
    if isinstance(options, IdentifierOptions):
        return model(identifier=options.identifier)

    try:
        if isinstance(options, str):
            return model(identifier=options)
        if isinstance(options, Mapping):
            return model(**options)
    except ValidationError as e:
        raise ConfigurationError.from_exception(
            e, f"Invalid options for {call_site}(): {e}"
        ).with_suggestion(f"Check the fields of {model.__name__}")

    raise ConfigurationError.invalid_value(
        f"{call_site}() options", options, f"{model.__name__}, mapping or str"
    )


def coerce_container_options(
    options: Union[ContainerOptions, Mapping[str, Any], None],
) -> ContainerOptions:
    """Turn the ``options`` argument of ``DIContainer()`` into ``ContainerOptions``.

    Raises:
        ConfigurationError: If options have the wrong type or unknown fields
    """
    if options is None:
        return ContainerOptions()
    if isinstance(options, ContainerOptions):
        container_options = options
    elif isinstance(options, Mapping):
        unknown = sorted(set(options) - {"custom_container_maps"})
        if unknown:
            raise ConfigurationError(
                f"Unknown container options: {', '.join(map(str, unknown))}",
                field_path="options",
                invalid_value=unknown,
                expected_type="ContainerOptions",
            ).with_suggestion("The only container option is custom_container_maps")
        container_options = ContainerOptions(**options)
    else:
        raise ConfigurationError.invalid_value(
            "DIContainer() options", options, "ContainerOptions or mapping"
        )

    maps = container_options.custom_container_maps
    if maps is not None and not isinstance(maps, ContainerMaps):
        raise ConfigurationError.invalid_value(
            "custom_container_maps", maps, "ContainerMaps"
        )
    return container_options
