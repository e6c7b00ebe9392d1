"""Persistent stores for bindingdoc."""

from .model_store import ModelStore, ModelStoreError

__all__ = ["ModelStore", "ModelStoreError"]
