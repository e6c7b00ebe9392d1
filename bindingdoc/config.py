"""Configuration loading for bindingdoc (.bindingdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models import SourceType

CONFIG_FILENAME = ".bindingdoc.yml"
DEFAULT_PROJECT_NAME = "project"

# Accepted spellings for ``managed.modules`` values.
_MODULE_SOURCE_ALIASES = {
    "binding": SourceType.BINDING,
    "pyo3": SourceType.BINDING,
    "python": SourceType.PYTHON,
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ProjectConfig:
    """Project identity."""

    name: str = DEFAULT_PROJECT_NAME
    version: Optional[str] = None
    description: Optional[str] = None


@dataclass
class NativeConfig:
    """Native crate settings."""

    entry_point: Optional[str] = None


@dataclass
class ManagedConfig:
    """Managed package settings and the per-module source map."""

    package: Optional[str] = None
    modules: Dict[str, SourceType] = field(default_factory=dict)


@dataclass
class BindingDocConfig:
    """Represents the settings defined in .bindingdoc.yml."""

    root: Path
    project: ProjectConfig = field(default_factory=ProjectConfig)
    native: NativeConfig = field(default_factory=NativeConfig)
    managed: Optional[ManagedConfig] = None

    @property
    def managed_package(self) -> str:
        if self.managed is not None and self.managed.package:
            return self.managed.package
        return self.project.name

    @property
    def native_entry_point(self) -> str:
        return self.native.entry_point or self.project.name

    def module_source(self, module_path: str) -> Optional[SourceType]:
        if self.managed is None:
            return None
        return self.managed.modules.get(module_path)

    def is_binding_module(self, module_path: str) -> bool:
        return self.module_source(module_path) is SourceType.BINDING


def load_config(config_path: Path) -> BindingDocConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return BindingDocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
    return config_from_dict(data, root=root)


def config_from_dict(data: Dict[str, Any], *, root: Path) -> BindingDocConfig:
    """Build a config from an already-parsed mapping."""
    project_data = _as_dict(data.get("project"))
    project = ProjectConfig(
        name=_as_str(project_data.get("name")) or DEFAULT_PROJECT_NAME,
        version=_as_str(project_data.get("version")),
        description=_as_str(project_data.get("description")),
    )

    native_data = _as_dict(data.get("native"))
    native = NativeConfig(entry_point=_as_str(native_data.get("entry_point")))

    managed = None
    if "managed" in data:
        managed_data = _as_dict(data.get("managed"))
        managed = ManagedConfig(
            package=_as_str(managed_data.get("package")),
            modules=_as_module_map(managed_data.get("modules")),
        )

    return BindingDocConfig(root=root, project=project, native=native, managed=managed)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_module_map(value: Any) -> Dict[str, SourceType]:
    modules: Dict[str, SourceType] = {}
    for key, raw in _as_dict(value).items():
        source = _as_str(raw)
        if not isinstance(key, str) or source is None:
            continue
        source_type = _MODULE_SOURCE_ALIASES.get(source.strip().lower())
        if source_type is not None:
            modules[key] = source_type
    return modules


__all__ = [
    "BindingDocConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "ManagedConfig",
    "NativeConfig",
    "ProjectConfig",
    "config_from_dict",
    "load_config",
]
