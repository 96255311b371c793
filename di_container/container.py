"""Dependency injection container.

This module provides ``DIContainer``, which holds service registrations and
produces instances of them on demand:
- Singleton and transient lifecycles
- Recursive constructor injection driven by the constructor argument table
- Circular dependencies between services broken with lazy references
- Optional substitution of the container's backing maps
"""

from typing import Any, List, Mapping, Optional, Tuple, Union

from loguru import logger

from .decorators import get_constructor_arguments, validate_arguments
from .errors import (
    ConfigurationError,
    MissingConstructorArgumentsError,
    NoImplementationError,
    NotRegisteredError,
    UnresolvedDependencyError,
)
from .lazy import LazyReference, fill
from .options import (
    ContainerOptions,
    GetOptions,
    HasOptions,
    RegisterOptions,
    coerce_container_options,
    coerce_options,
)
from .records import (
    FromClass,
    FromFactory,
    FromInstance,
    Implementation,
    Parent,
    RegistrationKind,
    RegistrationRecord,
    classify,
)
from .registry import ConstructorArgumentTable, ContainerMaps, InstanceCache, ServiceRegistry

ParentChain = Tuple[Parent, ...]
RegisterOptionsLike = Union[RegisterOptions, Mapping[str, Any], str, None]


class DIContainer:
    """A container that holds services and can produce instances of them.

    Every container owns its registry, constructor argument table and
    instance cache. Nothing is shared between containers unless the same
    custom maps are passed to both.
    """

    def __init__(self, options: Union[ContainerOptions, Mapping[str, Any], None] = None):
        """Initialize the container.

        Args:
            options: Optional construction options, as ``ContainerOptions`` or a
                mapping; ``custom_container_maps`` replaces the default dict-based storage

        Raises:
            ConfigurationError: If options are invalid
        """
        maps = coerce_container_options(options).custom_container_maps or ContainerMaps()
        self._registry = ServiceRegistry(maps.service_registry)
        self._constructor_arguments = ConstructorArgumentTable(maps.constructor_arguments)
        self._instances = InstanceCache(maps.instances)

    def __repr__(self) -> str:
        return f"<DIContainer services={len(self._registry)}>"

    def register_singleton(
        self,
        implementation: Any = None,
        options: RegisterOptionsLike = None,
    ) -> None:
        """Register a service that is instantiated once per container.

        All requests for the service retrieve the same instance.

        Args:
            implementation: Class or zero-argument factory
            options: Registration options; at least the identifier
        """
        self._register(RegistrationKind.SINGLETON, implementation, options)

    def register_transient(
        self,
        implementation: Any = None,
        options: RegisterOptionsLike = None,
    ) -> None:
        """Register a service that is instantiated on every request.

        Args:
            implementation: Class or zero-argument factory
            options: Registration options; at least the identifier
        """
        self._register(RegistrationKind.TRANSIENT, implementation, options)

    def get(self, options: Union[GetOptions, Mapping[str, Any], str, None] = None) -> Any:
        """Get an instance of the service registered under the given identifier.

        Args:
            options: Retrieval options or the identifier itself

        Returns:
            The service instance

        Raises:
            ConfigurationError: If options are missing or invalid
            NotRegisteredError: If nothing is registered under the identifier
            InstantiationError: If the service graph cannot be built
        """
        options = coerce_options(options, GetOptions, "get")
        if not self._registry.has(options.identifier):
            raise NotRegisteredError(options.identifier)
        return self._construct_instance(options.identifier)

    def has(self, options: Union[HasOptions, Mapping[str, Any], str, None] = None) -> bool:
        """Check if a service is registered, whether or not it was ever built.

        Args:
            options: Lookup options or the identifier itself

        Returns:
            True if the service is registered
        """
        options = coerce_options(options, HasOptions, "has")
        return self._registry.has(options.identifier)

    def identifiers(self) -> List[str]:
        """List the identifiers of all registered services."""
        return list(self._registry)

    def _register(
        self,
        kind: RegistrationKind,
        implementation: Any,
        options: RegisterOptionsLike,
    ) -> None:
        call_site = f"register_{kind.value}"
        options = coerce_options(options, RegisterOptions, call_site)
        identifier = options.identifier

        shape = self._implementation_shape(kind, implementation, options, call_site)

        if isinstance(shape, FromClass):
            if options.arguments is not None:
                arguments = validate_arguments(options.arguments, shape.cls.__name__)
            else:
                arguments = get_constructor_arguments(shape.cls)
            self._constructor_arguments.set_arguments(identifier, arguments)
        else:
            self._constructor_arguments.clear_arguments(identifier)

        # Clear cached instance of re-registered singletons
        if identifier in self._instances:
            self._instances.clear(identifier)
            logger.debug(f"Evicted cached instance of re-registered service '{identifier}'")

        record = RegistrationRecord(identifier=identifier, kind=kind, implementation=shape)
        self._registry.register(record)
        logger.debug(f"Registered {kind.value}: '{identifier}' -> {record.describe()}")

    @staticmethod
    def _implementation_shape(
        kind: RegistrationKind,
        implementation: Any,
        options: RegisterOptions,
        call_site: str,
    ) -> Implementation:
        if options.instance is not None:
            if implementation is not None:
                raise ConfigurationError(
                    f"{call_site}() got both an implementation and an instance for '{options.identifier}'",
                    field_path="instance",
                )
            if kind is not RegistrationKind.SINGLETON:
                raise ConfigurationError(
                    f"An instance can only be registered as a singleton ('{options.identifier}')",
                    field_path="instance",
                ).with_suggestion("Use register_singleton() or register a factory instead")
            return FromInstance(options.instance)

        # An implementation in the options wins over the positional one
        candidate = options.implementation if options.implementation is not None else implementation
        if candidate is None:
            raise NoImplementationError(options.identifier)
        return classify(options.identifier, candidate)

    def _construct_instance(
        self,
        identifier: str,
        parent_chain: ParentChain = (),
    ) -> Optional[Any]:
        """Construct the instance registered under ``identifier``.

        Dependencies are resolved recursively in declared order. A dependency
        that is already being constructed further up ``parent_chain`` gets
        that ancestor's lazy reference instead of a new instance.

        Returns:
            The instance, or None if ``identifier`` is not registered
        """
        record = self._registry.lookup(identifier)
        if record is None:
            return None

        if record.is_singleton and identifier in self._instances:
            return self._instances.get(identifier)

        me = Parent(identifier, LazyReference(identifier))
        implementation = record.implementation

        if isinstance(implementation, FromClass):
            mapped_arguments = self._constructor_arguments.get_arguments(identifier)
            if mapped_arguments is None:
                raise MissingConstructorArgumentsError(identifier, parent_chain)

            instance_arguments = [
                self._resolve_argument(dependency, me, parent_chain)
                for dependency in mapped_arguments
            ]
            instance = implementation.cls(*instance_arguments)
        elif isinstance(implementation, FromFactory):
            instance = implementation.factory()
        elif isinstance(implementation, FromInstance):
            instance = implementation.instance
        else:
            raise NoImplementationError(identifier, parent_chain, implementation=implementation)

        fill(me.reference, instance)

        if record.is_singleton:
            logger.debug(f"Created singleton instance of '{identifier}'")
            return self._instances.set(identifier, instance)

        logger.debug(f"Created transient instance of '{identifier}'")
        return instance

    def _resolve_argument(
        self,
        dependency: Optional[str],
        me: Parent,
        parent_chain: ParentChain,
    ) -> Any:
        if dependency is None:
            return None

        for parent in parent_chain:
            if parent.identifier == dependency:
                logger.debug(
                    f"Circular dependency '{me.identifier}' -> '{dependency}' "
                    f"resolved with a lazy reference"
                )
                return parent.reference

        next_parent_chain = parent_chain + (me,)
        instance = self._construct_instance(dependency, next_parent_chain)

        if instance is None and not self._registry.has(dependency):
            raise UnresolvedDependencyError(dependency, me.identifier, next_parent_chain)

        return instance
