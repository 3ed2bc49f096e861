"""
Initializer cascade: every model is built as

1. zero-value allocation
2. ``set_up()``
3. the one hook matching the source (dict, list or decoder)

A hook the model does not implement is skipped, so construction always
ends with a usable instance.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, TypeVar

from ..domain.capabilities import (
    SET_UP,
    SET_WITH_DECODER,
    SET_WITH_DICT,
    SET_WITH_LIST,
    call_hook,
)
from ..infrastructure.archive import ArchiveError, Decoder, is_envelope
from ..infrastructure.files import read_bytes
from ..infrastructure.resources import read_collection, read_collection_file

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _source_hook(source: Any) -> Optional[str]:
    if source is None:
        return None
    if isinstance(source, Decoder):
        return SET_WITH_DECODER
    if isinstance(source, Mapping):
        return SET_WITH_DICT
    if isinstance(source, Sequence) and not isinstance(source, (str, bytes, bytearray)):
        return SET_WITH_LIST
    raise TypeError(f"Unsupported construction source: {type(source).__name__}")


def initialize(instance: T, source: Any = None) -> T:
    hook = _source_hook(source)
    call_hook(instance, SET_UP)
    if hook is not None and not call_hook(instance, hook, source):
        logger.debug("%s does not implement %s; keeping defaults", type(instance).__name__, hook)
    return instance


def construct(model_type: type[T], source: Any = None) -> T:
    instance = model_type.__new__(model_type)
    return initialize(instance, source)


def construct_from_file(model_type: type[T], path: Path, *, fallback: Optional[Path] = None) -> T:
    """
    Build *model_type* from *path*: archive first, then a plain mapping or
    sequence, then the *fallback* resource, then defaults. Never raises for
    missing or malformed files.
    """
    data = read_bytes(path)
    if data is not None:
        try:
            decoder = Decoder.from_bytes(data, factory=construct)
        except ArchiveError as exc:
            logger.debug("%s is not an archive: %s", path, exc)
        else:
            return construct(model_type, decoder)

        collection = read_collection(data, suffix=path.suffix)
        if collection is not None and not is_envelope(collection):
            return construct(model_type, collection)
        logger.debug("%s holds no usable data for %s", path, model_type.__name__)

    if fallback is not None and fallback != path:
        collection = read_collection_file(fallback)
        if collection is not None:
            logger.debug("Falling back to resource %s for %s", fallback, model_type.__name__)
            return construct(model_type, collection)

    return construct(model_type)
