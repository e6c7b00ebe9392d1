"""Tests for bindingdoc.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from bindingdoc.config import (
    BindingDocConfig,
    ConfigError,
    ManagedConfig,
    config_from_dict,
    load_config,
)
from bindingdoc.models import SourceType


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, BindingDocConfig)
    assert config.root == tmp_path.resolve()
    assert config.project.name == "project"
    assert config.project.version is None
    assert config.native.entry_point is None
    assert config.managed is None
    assert config.managed_package == "project"
    assert config.native_entry_point == "project"


def test_load_config_parses_expected_fields(write_config, tmp_path: Path) -> None:
    config_file = write_config(
        """
        project:
          name: rustscale
          version: 0.4.1
          description: "Scaling helpers"
        native:
          entry_point: rustscale
        managed:
          package: pysnake
          modules:
            pysnake.handlers: binding
            pysnake._core: pyo3
            pysnake.utils: python
        """
    )

    config = load_config(config_file)

    assert config.root == tmp_path.resolve()
    assert config.project.name == "rustscale"
    assert config.project.version == "0.4.1"
    assert config.project.description == "Scaling helpers"
    assert config.native_entry_point == "rustscale"
    assert isinstance(config.managed, ManagedConfig)
    assert config.managed_package == "pysnake"
    assert config.managed.modules == {
        "pysnake.handlers": SourceType.BINDING,
        "pysnake._core": SourceType.BINDING,
        "pysnake.utils": SourceType.PYTHON,
    }


def test_load_config_accepts_directory(write_config, tmp_path: Path) -> None:
    write_config(
        """
        project:
          name: rustscale
        """
    )

    config = load_config(tmp_path)

    assert config.project.name == "rustscale"


def test_binding_module_lookup() -> None:
    config = config_from_dict(
        {"managed": {"modules": {"pkg.fast": "binding", "pkg.slow": "python"}}},
        root=Path("."),
    )

    assert config.is_binding_module("pkg.fast") is True
    assert config.is_binding_module("pkg.slow") is False
    assert config.is_binding_module("pkg.other") is False
    assert config.module_source("pkg.slow") is SourceType.PYTHON
    assert config.module_source("pkg.other") is None


def test_unknown_module_sources_are_ignored() -> None:
    config = config_from_dict(
        {"managed": {"modules": {"pkg.a": "cython", "pkg.b": "BINDING", "pkg.c": None}}},
        root=Path("."),
    )

    assert config.managed is not None
    assert config.managed.modules == {"pkg.b": SourceType.BINDING}


def test_package_falls_back_to_project_name() -> None:
    config = config_from_dict({"project": {"name": "geo"}, "managed": {}}, root=Path("."))

    assert config.managed is not None
    assert config.managed.package is None
    assert config.managed_package == "geo"
    assert config.native_entry_point == "geo"


def test_empty_config_file_yields_defaults(write_config) -> None:
    config = load_config(write_config("\n"))

    assert config.project.name == "project"
    assert config.managed is None


def test_invalid_yaml_raises_config_error(write_config) -> None:
    config_file = write_config(
        """
        project: [unterminated
        """
    )

    with pytest.raises(ConfigError):
        load_config(config_file)


def test_non_mapping_root_raises_config_error(write_config) -> None:
    config_file = write_config(
        """
        - just
        - a list
        """
    )

    with pytest.raises(ConfigError):
        load_config(config_file)
