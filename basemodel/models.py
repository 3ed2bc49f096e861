from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, TypeVar, Union

from .application.container import get_container
from .application.initializer import construct, initialize
from .infrastructure.archive import Decoder, register_model_type

M = TypeVar("M", bound="BaseModel")

PathLike = Union[str, os.PathLike]


class BaseModel:
    """
    Base class for model objects.

    Subclasses opt into any of the hooks ``set_up``, ``set_with_dict``,
    ``set_with_list``, ``set_with_decoder`` and ``encode_with_encoder``.
    Loading order is ``set_up`` first, then the hook matching the source.
    BaseModel itself defines none of them.
    """

    unique_id: Optional[str] = None

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        register_model_type(cls)

    def __init__(self, source: Any = None):
        initialize(self, source)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} unique_id={self.unique_id!r}>"

    # --- construction -----------------------------------------------------
    @classmethod
    def instance(cls: type[M]) -> M:
        return construct(cls)

    @classmethod
    def from_dict(cls: type[M], mapping: Mapping[str, Any]) -> M:
        return construct(cls, mapping)

    @classmethod
    def from_list(cls: type[M], sequence: Sequence[Any]) -> M:
        return construct(cls, sequence)

    @classmethod
    def from_decoder(cls: type[M], decoder: Decoder) -> M:
        return construct(cls, decoder)

    @classmethod
    def from_file(cls: type[M], path: PathLike) -> M:
        return get_container().persistence.load(cls, Path(path))

    # --- shared instance --------------------------------------------------
    @classmethod
    def shared_instance(cls: type[M]) -> M:
        return get_container().registry.get(cls)

    @classmethod
    def has_shared_instance(cls) -> bool:
        return get_container().registry.has(cls)

    @classmethod
    def set_shared_instance(cls: type[M], instance: M) -> None:
        get_container().registry.set(cls, instance)

    @classmethod
    def reload_shared_instance(cls: type[M]) -> M:
        return get_container().registry.reload(cls)

    # --- files ------------------------------------------------------------
    @classmethod
    def resource_file(cls) -> Optional[PathLike]:
        """Bootstrap mapping or sequence, relative to the resource directory."""
        return f"{cls.__name__}.json"

    @classmethod
    def save_file(cls) -> PathLike:
        """Archive of the shared instance, relative to the save directory."""
        return f"{cls.__name__}.json"

    @classmethod
    def save_file_for_id(cls, unique_id: str) -> PathLike:
        return f"{cls.__name__}-{unique_id}.json"

    @classmethod
    def load(cls: type[M], unique_id: str) -> M:
        return get_container().persistence.load_individual(cls, unique_id)

    def write_to_file(self, path: PathLike, *, atomic: bool = True) -> None:
        get_container().persistence.save(self, Path(path), atomic=atomic)

    def save(self) -> Path:
        """
        Persist to the type's save file when this is the shared instance,
        otherwise to the file for ``unique_id`` (assigned when missing).
        """
        container = get_container()
        if container.registry.is_shared(self):
            return container.persistence.save_shared(self)
        return container.persistence.save_individual(self)
