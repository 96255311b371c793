"""Tests for service manifests."""

import json
import textwrap

import pytest
import yaml

from di_container import ConfigurationError, DIContainer, RegistrationKind
from di_container.config import (
    ManifestLoader,
    ServiceManifest,
    apply_manifest,
    import_object,
    load_manifest,
    parse_manifest,
)

SERVICES_MODULE = textwrap.dedent(
    """
    class Config:
        def __init__(self):
            self.name = "test"


    class Logger:
        def __init__(self, config):
            self.config = config


    class Service:
        def __init__(self, logger, retries):
            self.logger = logger
            self.retries = retries


    def make_clock():
        return {"ticks": 0}


    NOT_CALLABLE = 42
    """
)


@pytest.fixture
def services_module(tmp_path, monkeypatch):
    """Write an importable module of sample services."""
    (tmp_path / "manifest_services.py").write_text(SERVICES_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "manifest_services"


@pytest.fixture
def manifest_data(services_module):
    return {
        "services": [
            {"identifier": "IConfig", "implementation": f"{services_module}:Config", "arguments": []},
            {
                "identifier": "ILogger",
                "kind": "Transient",
                "implementation": f"{services_module}.Logger",
                "arguments": ["IConfig"],
            },
            {
                "identifier": "IService",
                "implementation": f"{services_module}:Service",
                "arguments": ["ILogger", None],
            },
            {"identifier": "IClock", "factory": f"{services_module}:make_clock"},
        ]
    }


class TestManifestLoader:
    """Test suite for ManifestLoader."""

    def test_load_yaml(self, tmp_path, manifest_data):
        path = tmp_path / "services.yaml"
        path.write_text(yaml.safe_dump(manifest_data))

        assert ManifestLoader().load(path) == manifest_data

    def test_load_json(self, tmp_path, manifest_data):
        path = tmp_path / "services.json"
        path.write_text(json.dumps(manifest_data))

        assert ManifestLoader().load(path) == manifest_data

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            ManifestLoader().load(tmp_path / "missing.yaml")

        assert exc_info.value.error_code == "CONFIG_FILE_NOT_FOUND"

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "services.toml"
        path.write_text("")

        with pytest.raises(ConfigurationError) as exc_info:
            ManifestLoader().load(path)

        assert exc_info.value.error_code == "CONFIG_UNSUPPORTED_FORMAT"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("services: [unclosed")

        with pytest.raises(ConfigurationError):
            ManifestLoader().load(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            ManifestLoader().load(path)


class TestServiceManifest:
    """Test suite for manifest validation and merging."""

    def test_parse(self, manifest_data):
        manifest = parse_manifest(manifest_data)

        assert [entry.identifier for entry in manifest.services] == ["IConfig", "ILogger", "IService", "IClock"]
        assert manifest.services[1].kind is RegistrationKind.TRANSIENT
        assert manifest.services[0].kind is RegistrationKind.SINGLETON
        assert manifest.services[2].arguments == ["ILogger", None]

    @pytest.mark.parametrize(
        "entry",
        [
            {"identifier": "X"},
            {"identifier": "X", "implementation": "a:B", "factory": "a:c"},
            {"identifier": "X", "factory": "a:c", "arguments": []},
            {"identifier": "", "implementation": "a:B"},
            {"identifier": "X", "implementation": "a:B", "kind": "scoped"},
            {"identifier": "X", "implementation": "a:B", "unknown": 1},
        ],
    )
    def test_invalid_entries(self, entry):
        with pytest.raises(ConfigurationError):
            parse_manifest({"services": [entry]})

    def test_merge_later_wins(self):
        base = ServiceManifest.model_validate({
            "services": [
                {"identifier": "A", "implementation": "m:A"},
                {"identifier": "B", "implementation": "m:B"},
            ]
        })
        override = ServiceManifest.model_validate({
            "services": [{"identifier": "A", "factory": "m:make_a"}]
        })

        merged = base.merge(override)

        assert [entry.identifier for entry in merged.services] == ["B", "A"]
        assert merged.services[1].factory == "m:make_a"

    def test_load_manifest_merges_files(self, tmp_path):
        first = tmp_path / "base.yaml"
        first.write_text("services:\n  - identifier: A\n    implementation: m:A\n")
        second = tmp_path / "override.json"
        second.write_text(json.dumps({"services": [{"identifier": "A", "implementation": "m:Other"}]}))

        manifest = load_manifest(first, second)

        assert len(manifest.services) == 1
        assert manifest.services[0].implementation == "m:Other"


class TestImportObject:
    """Test suite for import paths."""

    def test_colon_and_dot_forms(self, services_module):
        assert import_object(f"{services_module}:make_clock") is import_object(f"{services_module}.make_clock")

    def test_missing_module(self):
        with pytest.raises(ConfigurationError, match="Cannot import module"):
            import_object("no_such_module_anywhere:Thing")

    def test_missing_attribute(self, services_module):
        with pytest.raises(ConfigurationError, match="no attribute 'Missing'"):
            import_object(f"{services_module}:Missing")

    def test_missing_nested_attribute_names_the_segment(self, services_module):
        """The message names the segment that failed, not the whole path."""
        with pytest.raises(ConfigurationError) as exc_info:
            import_object(f"{services_module}:Config.missing_method")

        assert "no attribute 'missing_method'" in exc_info.value.message
        assert "no attribute 'Config.missing_method'" not in exc_info.value.message

    def test_malformed_path(self):
        with pytest.raises(ConfigurationError):
            import_object("nodots")


class TestApplyManifest:
    """Test suite for registering manifests into a container."""

    def test_registers_and_resolves(self, manifest_data):
        container = apply_manifest(DIContainer(), parse_manifest(manifest_data))

        assert container.identifiers() == ["IConfig", "ILogger", "IService", "IClock"]

        service = container.get("IService")
        assert service.retries is None
        assert service.logger.config.name == "test"
        assert service.logger.config is container.get("IConfig")
        assert container.get("ILogger") is not container.get("ILogger")
        assert container.get("IClock") == {"ticks": 0}

    def test_implementation_must_be_class(self, services_module):
        manifest = parse_manifest({
            "services": [{"identifier": "X", "implementation": f"{services_module}:make_clock"}]
        })

        with pytest.raises(ConfigurationError) as exc_info:
            apply_manifest(DIContainer(), manifest)

        assert exc_info.value.error_code == "CONFIG_INVALID_VALUE"

    def test_factory_must_be_callable(self, services_module):
        manifest = parse_manifest({
            "services": [{"identifier": "X", "factory": f"{services_module}:NOT_CALLABLE"}]
        })

        with pytest.raises(ConfigurationError):
            apply_manifest(DIContainer(), manifest)
