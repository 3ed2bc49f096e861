from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Any, Optional, TypeVar

from ..domain.capabilities import ENCODE_WITH_ENCODER, call_hook
from ..infrastructure.archive import Encoder, model_type_name
from ..infrastructure.files import write_bytes
from ..infrastructure.metrics import MetricsClient
from .config import Settings
from .initializer import construct, construct_from_file

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SUFFIX = ".json"


def _as_path(value: Any, *, model_type: type, what: str) -> Path:
    if not isinstance(value, (str, os.PathLike)):
        raise ValueError(
            f"{model_type.__name__}.{what}() must return a path, got {type(value).__name__}"
        )
    text = os.fspath(value)
    if not isinstance(text, str) or not text.strip():
        raise ValueError(f"{model_type.__name__}.{what}() returned an empty path")
    return Path(text)


def _check_unique_id(model_type: type, unique_id: Any) -> str:
    text = str(unique_id) if unique_id is not None else ""
    if not text or text in {".", ".."} or "/" in text or "\\" in text or "\x00" in text:
        raise ValueError(f"unique_id {unique_id!r} cannot be used in a file name for {model_type.__name__}")
    return text


class PersistenceManager:
    def __init__(self, settings: Settings, metrics: MetricsClient | None = None):
        self.settings = settings
        self._metrics = metrics or MetricsClient(enabled=settings.metrics_enabled)

    # --- paths ------------------------------------------------------------
    def resource_path(self, model_type: type) -> Optional[Path]:
        declared = getattr(model_type, "resource_file", None)
        value = declared() if callable(declared) else f"{model_type.__name__}{DEFAULT_SUFFIX}"
        if value is None:
            return None
        return self.settings.resource_dir / _as_path(value, model_type=model_type, what="resource_file")

    def save_path(self, model_type: type) -> Path:
        declared = getattr(model_type, "save_file", None)
        value = declared() if callable(declared) else f"{model_type.__name__}{DEFAULT_SUFFIX}"
        return self.settings.save_dir / _as_path(value, model_type=model_type, what="save_file")

    def save_path_for_id(self, model_type: type, unique_id: str) -> Path:
        unique_id = _check_unique_id(model_type, unique_id)
        declared = getattr(model_type, "save_file_for_id", None)
        if callable(declared):
            value = declared(unique_id)
        else:
            value = f"{model_type.__name__}-{unique_id}{DEFAULT_SUFFIX}"
        return self.settings.save_dir / _as_path(value, model_type=model_type, what="save_file_for_id")

    # --- writing ----------------------------------------------------------
    def encode(self, instance: Any) -> bytes:
        encoder = Encoder(model_type_name(type(instance)))
        call_hook(instance, ENCODE_WITH_ENCODER, encoder)
        return encoder.to_bytes()

    def save(self, instance: Any, path: Path, *, atomic: Optional[bool] = None) -> None:
        atomic = self.settings.atomic_writes if atomic is None else atomic
        path = Path(path)
        with self._metrics.span("model.save", model_type=type(instance), path=path) as details:
            data = self.encode(instance)
            details.update(bytes=len(data), atomic=atomic)
            try:
                write_bytes(path, data, atomic=atomic)
            except OSError:
                logger.exception("Failed to save %s to %s", type(instance).__name__, path)
                raise
        logger.debug("Saved %s to %s (%d bytes)", type(instance).__name__, path, len(data))

    def save_shared(self, instance: Any) -> Path:
        path = self.save_path(type(instance))
        self.save(instance, path)
        return path

    def save_individual(self, instance: Any) -> Path:
        if not getattr(instance, "unique_id", None):
            instance.unique_id = uuid.uuid4().hex
        path = self.save_path_for_id(type(instance), instance.unique_id)
        self.save(instance, path)
        return path

    # --- reading ----------------------------------------------------------
    def load(self, model_type: type[T], path: Path, *, use_resource: bool = True) -> T:
        """
        Read *path* into a new *model_type*. When *path* is missing or
        unusable the type's resource file is tried before plain defaults.
        """
        path = Path(path)
        fallback = self.resource_path(model_type) if use_resource else None
        with self._metrics.span("model.load", model_type=model_type, path=path) as details:
            details["exists"] = path.exists()
            return construct_from_file(model_type, path, fallback=fallback)

    def load_shared(self, model_type: type[T]) -> T:
        save_path = self.save_path(model_type)
        if save_path.exists():
            return self.load(model_type, save_path)
        resource_path = self.resource_path(model_type)
        if resource_path is not None:
            return self.load(model_type, resource_path, use_resource=False)
        logger.debug("No save or resource file for %s; using defaults", model_type.__name__)
        return construct(model_type)

    def load_individual(self, model_type: type[T], unique_id: str) -> T:
        path = self.save_path_for_id(model_type, unique_id)
        instance = self.load(model_type, path)
        if getattr(instance, "unique_id", None) is None:
            instance.unique_id = unique_id
        return instance
