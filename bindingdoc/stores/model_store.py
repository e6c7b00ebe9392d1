"""Persistent JSON storage for documentation models."""

from __future__ import annotations

from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Any, Dict

from ..logging import get_logger
from ..models import DocModel
from ..serialization import from_dict, to_dict

_MODEL_VERSION = 1

logger = get_logger("stores.model_store")


class ModelStoreError(RuntimeError):
    """Raised when a model file cannot be read or does not hold a model."""


class ModelStore:
    """Reads and writes ``DocModel`` payloads as versioned JSON documents.

    A file may hold either the versioned envelope written by ``save`` or a
    bare model mapping produced by an external parser.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> DocModel:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            # Propagated unchanged.
            raise
        except OSError as exc:
            raise ModelStoreError(f"Failed to read {self._path}: {exc}") from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ModelStoreError(f"{self._path} is not valid JSON: {exc}") from exc

        payload = _unwrap(data, self._path)
        try:
            model = from_dict(DocModel, payload)
        except ValueError as exc:
            raise ModelStoreError(f"{self._path} does not describe a model: {exc}") from exc
        logger.debug(
            "Loaded %d native and %d managed module(s) from %s",
            len(model.native_modules),
            len(model.managed_modules),
            self._path,
        )
        return model

    def save(self, model: DocModel) -> Path:
        payload = {
            "version": _MODEL_VERSION,
            "saved_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "model": to_dict(model),
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
        )
        logger.debug("Wrote model to %s", self._path)
        return self._path


def _unwrap(data: Any, path: Path) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ModelStoreError(f"{path} must contain a JSON object at the root")
    if "model" not in data:
        return data
    version = data.get("version")
    if version != _MODEL_VERSION:
        raise ModelStoreError(f"{path} has unsupported model version {version!r}")
    model = data["model"]
    if not isinstance(model, dict):
        raise ModelStoreError(f"{path} holds a malformed model entry")
    return model


__all__ = ["ModelStore", "ModelStoreError"]
