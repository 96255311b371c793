"""Service manifests.

A manifest lists services to register, in order, together with their
constructor arguments. It is one of the external sources that feed a
container's constructor argument table:

    services:
      - identifier: ILogger
        kind: singleton
        implementation: myapp.logging:ConsoleLogger
        arguments: [IConfig, null]
      - identifier: IClock
        kind: transient
        factory: myapp.clock:make_clock
"""

import importlib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..container import DIContainer
from ..errors import ConfigurationError
from ..options import RegisterOptions
from ..records import RegistrationKind, is_class, is_factory
from .loader import ManifestLoader


class ServiceEntry(BaseModel):
    """One service in a manifest."""

    model_config = ConfigDict(extra="forbid")

    identifier: str
    kind: RegistrationKind = RegistrationKind.SINGLETON
    implementation: Optional[str] = None
    factory: Optional[str] = None
    arguments: Optional[List[Optional[str]]] = None

    @field_validator("identifier")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("identifier must be a non-empty string")
        return value

    @field_validator("kind", mode="before")
    @classmethod
    def _lower_kind(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "ServiceEntry":
        if (self.implementation is None) == (self.factory is None):
            raise ValueError(
                f"service '{self.identifier}' needs exactly one of 'implementation' or 'factory'"
            )
        if self.factory is not None and self.arguments is not None:
            raise ValueError(f"service '{self.identifier}' is a factory and takes no arguments")
        return self

    @property
    def target(self) -> str:
        return self.implementation or self.factory


class ServiceManifest(BaseModel):
    """An ordered list of services."""

    model_config = ConfigDict(extra="forbid")

    services: List[ServiceEntry] = []

    def merge(self, other: "ServiceManifest") -> "ServiceManifest":
        """Combine two manifests; entries of ``other`` replace same-identifier entries."""
        merged: Dict[str, ServiceEntry] = {entry.identifier: entry for entry in self.services}
        for entry in other.services:
            merged.pop(entry.identifier, None)
            merged[entry.identifier] = entry
        return ServiceManifest(services=list(merged.values()))


def import_object(path: str) -> Any:
    """Import ``module:attribute`` or ``module.attribute``.

    Raises:
        ConfigurationError: If the module or attribute cannot be found
    """
    if ":" in path:
        module_name, _, attribute_path = path.partition(":")
    else:
        module_name, _, attribute_path = path.rpartition(".")
    if not module_name or not attribute_path:
        raise ConfigurationError.invalid_value("import path", path, "'module:attribute'")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError.from_exception(
            e, f"Cannot import module '{module_name}' for '{path}': {e}"
        )

    for attribute in attribute_path.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as e:
            raise ConfigurationError.from_exception(
                e, f"Cannot resolve '{path}': no attribute '{attribute}'"
            )
    return target


def parse_manifest(data: Dict[str, Any], source: Optional[Union[str, Path]] = None) -> ServiceManifest:
    """Validate a manifest document.

    Raises:
        ConfigurationError: If the document does not match the manifest schema
    """
    try:
        return ServiceManifest.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError.from_exception(
            e, f"Invalid service manifest{f' {source}' if source else ''}: {e}", config_path=source
        )


def load_manifest(*paths: Union[str, Path]) -> ServiceManifest:
    """Load and merge manifest files; later files win."""
    loader = ManifestLoader()
    manifest = ServiceManifest()
    for path in paths:
        manifest = manifest.merge(parse_manifest(loader.load(path), source=path))
        logger.debug(f"Loaded service manifest {path}")
    return manifest


def apply_manifest(container: DIContainer, manifest: ServiceManifest) -> DIContainer:
    """Register every manifest entry with ``container``, in order."""
    for entry in manifest.services:
        target = import_object(entry.target)
        if entry.implementation is not None and not is_class(target):
            raise ConfigurationError.invalid_value(
                f"services.{entry.identifier}.implementation", target, "class"
            )
        if entry.factory is not None and not is_factory(target):
            raise ConfigurationError.invalid_value(
                f"services.{entry.identifier}.factory", target, "function or other non-class callable"
            )
        options = RegisterOptions(
            identifier=entry.identifier,
            implementation=target,
            arguments=entry.arguments,
        )
        if entry.kind is RegistrationKind.SINGLETON:
            container.register_singleton(options=options)
        else:
            container.register_transient(options=options)
    logger.debug(f"Applied {len(manifest.services)} manifest services")
    return container
