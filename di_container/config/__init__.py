"""Configuration for di-container.

This module provides:
- Service manifests (YAML/JSON) that register services into a container
- Process-level settings with environment variable overrides
"""

from .loader import ManifestLoader
from .manifest import (
    ServiceEntry,
    ServiceManifest,
    apply_manifest,
    import_object,
    load_manifest,
    parse_manifest,
)
from .settings import ContainerSettings

__all__ = [
    "ManifestLoader",
    "ServiceEntry",
    "ServiceManifest",
    "apply_manifest",
    "import_object",
    "load_manifest",
    "parse_manifest",
    "ContainerSettings",
]
