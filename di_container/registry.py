"""The three maps a container owns.

Each map is a thin wrapper around a ``MutableMapping``. By default the
container creates plain dicts; ``ContainerMaps`` lets a caller substitute
other storage that honours the same key/value contract. The wrappers add no
locking, the container assumes a single writer.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, MutableMapping, Optional, Sequence

from .records import RegistrationRecord

ConstructorArguments = List[Optional[str]]


@dataclass
class ContainerMaps:
    """Backing storage for a container's registry, argument table and cache."""
    constructor_arguments: MutableMapping[str, ConstructorArguments] = field(default_factory=dict)
    service_registry: MutableMapping[str, RegistrationRecord] = field(default_factory=dict)
    instances: MutableMapping[str, Any] = field(default_factory=dict)


class ServiceRegistry:
    """Registry mapping identifiers to registration records."""

    def __init__(self, backing: Optional[MutableMapping[str, RegistrationRecord]] = None):
        """Initialize service registry.

        Args:
            backing: Storage for the records, a new dict if omitted
        """
        self._records = backing if backing is not None else {}

    def register(self, record: RegistrationRecord) -> None:
        """Store ``record``, replacing any previous record for its identifier."""
        self._records[record.identifier] = record

    def has(self, identifier: str) -> bool:
        """Check if a service is registered.

        Args:
            identifier: Service identifier

        Returns:
            True if registered
        """
        return self._records.get(identifier) is not None

    def lookup(self, identifier: str) -> Optional[RegistrationRecord]:
        """Get the registration record for ``identifier``, if any."""
        return self._records.get(identifier)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)


class ConstructorArgumentTable:
    """Ordered dependency identifiers for every class-shaped registration."""

    def __init__(self, backing: Optional[MutableMapping[str, ConstructorArguments]] = None):
        self._arguments = backing if backing is not None else {}

    def set_arguments(self, identifier: str, arguments: Sequence[Optional[str]]) -> None:
        self._arguments[identifier] = list(arguments)

    def get_arguments(self, identifier: str) -> Optional[ConstructorArguments]:
        return self._arguments.get(identifier)

    def clear_arguments(self, identifier: str) -> None:
        self._arguments.pop(identifier, None)


class InstanceCache:
    """Constructed singleton instances keyed by identifier.

    Presence is tracked by key, so a singleton whose factory returned
    ``None`` is still cached.
    """

    def __init__(self, backing: Optional[MutableMapping[str, Any]] = None):
        self._instances = backing if backing is not None else {}

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._instances

    def get(self, identifier: str) -> Any:
        return self._instances.get(identifier)

    def set(self, identifier: str, instance: Any) -> Any:
        """Cache ``instance`` and return it."""
        self._instances[identifier] = instance
        return instance

    def clear(self, identifier: str) -> None:
        self._instances.pop(identifier, None)
