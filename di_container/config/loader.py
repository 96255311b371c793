"""Manifest file loading utilities.

Supports YAML (``.yaml``/``.yml``) and JSON (``.json``) documents whose top
level is a mapping.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..errors import ConfigurationError

try:
    from yaml import CSafeLoader as YamlLoader
except ImportError:
    from yaml import SafeLoader as YamlLoader


class ManifestLoader:
    """Utility class for loading manifest documents from disk."""

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load a manifest document, choosing the parser by file suffix.

        Raises:
            ConfigurationError: If the file is missing, unsupported or invalid
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix in (".yaml", ".yml"):
            return self.load_yaml(path)
        if suffix == ".json":
            return self.load_json(path)
        raise ConfigurationError(
            f"Unsupported manifest format '{suffix or path.name}': {path}",
            config_path=path,
            error_code="CONFIG_UNSUPPORTED_FORMAT",
        ).with_suggestion("Use a .yaml, .yml or .json file")

    def load_yaml(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load a manifest from a YAML file.

        Args:
            path: Path to YAML file

        Returns:
            Manifest dictionary

        Raises:
            ConfigurationError: If the file doesn't exist or the YAML is invalid
        """
        path = self._existing(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = yaml.load(f, Loader=YamlLoader) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError.from_exception(
                e, f"Invalid YAML in {path}: {e}", config_path=path
            )
        return self._mapping(content, path)

    def load_json(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load a manifest from a JSON file.

        Args:
            path: Path to JSON file

        Returns:
            Manifest dictionary

        Raises:
            ConfigurationError: If the file doesn't exist or the JSON is invalid
        """
        path = self._existing(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = json.load(f) or {}
        except json.JSONDecodeError as e:
            raise ConfigurationError.from_exception(
                e, f"Invalid JSON in {path}: {e}", config_path=path
            )
        return self._mapping(content, path)

    def _existing(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(
                f"Manifest file not found: {path}",
                config_path=path,
                error_code="CONFIG_FILE_NOT_FOUND",
            )
        return path

    def _mapping(self, content: Any, path: Path) -> Dict[str, Any]:
        if not isinstance(content, dict):
            raise ConfigurationError(
                f"Manifest file must contain a mapping: {path}",
                config_path=path,
                invalid_value=content,
                expected_type="mapping",
            )
        return content
