"""
Keyed archive codec used for save files.

An archive is a UTF-8 JSON envelope::

    {"$archiver": "basemodel", "$class": "pkg.module.Config", "$fields": {...}}

Field values are JSON scalars, lists and dicts. A few shapes carry a
marker key so they survive the trip:

- ``{"$bytes": "<base64>"}``           raw bytes
- ``{"$dict": {...}}``                 a dict whose own keys start with ``$``
- ``{"$model": "<name>", "$fields": {...}}``  a nested model
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from ..domain.capabilities import ENCODE_WITH_ENCODER, call_hook, has_hook

logger = logging.getLogger(__name__)

ARCHIVER = "basemodel"

ModelFactory = Callable[[type, "Decoder"], Any]

_model_types: Dict[str, type] = {}


class ArchiveError(ValueError):
    pass


def model_type_name(model_type: type) -> str:
    return f"{model_type.__module__}.{model_type.__qualname__}"


def register_model_type(cls: type) -> type:
    """Make *cls* decodable when it appears nested inside an archive."""
    _model_types[model_type_name(cls)] = cls
    return cls


def lookup_model_type(name: str) -> Optional[type]:
    return _model_types.get(name)


def is_envelope(value: Any) -> bool:
    return isinstance(value, dict) and value.get("$archiver") == ARCHIVER


class Encoder:
    def __init__(self, class_name: str = ""):
        self.class_name = class_name
        self._fields: dict[str, Any] = {}

    def encode(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Archive keys must be str, got {type(key).__name__}")
        self._fields[key] = self._pack(value)

    def encode_many(self, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            self.encode(key, value)

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self._fields)

    def to_envelope(self) -> dict[str, Any]:
        return {"$archiver": ARCHIVER, "$class": self.class_name, "$fields": self._fields}

    def to_bytes(self) -> bytes:
        return json.dumps(self.to_envelope(), ensure_ascii=False, indent=2, sort_keys=True).encode("utf-8")

    def _pack(self, value: Any) -> Any:
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        if isinstance(value, (bytes, bytearray)):
            return {"$bytes": base64.b64encode(bytes(value)).decode("ascii")}
        if isinstance(value, (list, tuple)):
            return [self._pack(item) for item in value]
        if isinstance(value, dict):
            packed = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TypeError(f"Archive dict keys must be str, got {type(key).__name__}")
                packed[key] = self._pack(item)
            if any(key.startswith("$") for key in packed):
                return {"$dict": packed}
            return packed
        if has_hook(value, ENCODE_WITH_ENCODER):
            child = Encoder(model_type_name(type(value)))
            call_hook(value, ENCODE_WITH_ENCODER, child)
            return {"$model": child.class_name, "$fields": child._fields}
        raise TypeError(f"Cannot archive value of type {type(value).__name__}")


class Decoder:
    def __init__(
        self,
        fields: Mapping[str, Any],
        class_name: str = "",
        *,
        factory: Optional[ModelFactory] = None,
    ):
        self.class_name = class_name
        self._fields = dict(fields)
        self._factory = factory

    @classmethod
    def from_bytes(cls, data: bytes, *, factory: Optional[ModelFactory] = None) -> "Decoder":
        try:
            envelope = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ArchiveError(f"Not an archive: {exc}") from exc
        if not is_envelope(envelope):
            raise ArchiveError("Not an archive: missing archiver marker")
        fields = envelope.get("$fields")
        if not isinstance(fields, dict):
            raise ArchiveError("Not an archive: fields must be a mapping")
        for value in fields.values():
            _check_markers(value)
        return cls(fields, str(envelope.get("$class") or ""), factory=factory)

    def contains(self, key: str) -> bool:
        return key in self._fields

    def keys(self) -> Iterable[str]:
        return self._fields.keys()

    def decode(self, key: str, default: Any = None) -> Any:
        if key not in self._fields:
            return default
        return self._unpack(self._fields[key])

    def _unpack(self, value: Any) -> Any:
        if isinstance(value, list):
            return [self._unpack(item) for item in value]
        if not isinstance(value, dict):
            return value
        if "$bytes" in value:
            return base64.b64decode(value["$bytes"])
        if "$dict" in value:
            return {key: self._unpack(item) for key, item in value["$dict"].items()}
        if "$model" in value:
            return self._unpack_model(value["$model"], value.get("$fields", {}))
        return {key: self._unpack(item) for key, item in value.items()}

    def _unpack_model(self, name: str, fields: Mapping[str, Any]) -> Any:
        child = Decoder(fields, name, factory=self._factory)
        model_type = lookup_model_type(name)
        if model_type is None or self._factory is None:
            logger.debug("Nested model %s is not registered; decoding as dict", name)
            return {key: child.decode(key) for key in child.keys()}
        return self._factory(model_type, child)


def _check_markers(value: Any) -> None:
    """Reject marker values that could not be unpacked later."""
    if isinstance(value, list):
        for item in value:
            _check_markers(item)
        return
    if not isinstance(value, dict):
        return
    if "$bytes" in value:
        encoded = value["$bytes"]
        if not isinstance(encoded, str):
            raise ArchiveError("Malformed archive: $bytes must be base64 text")
        try:
            base64.b64decode(encoded, validate=True)
        except ValueError as exc:
            raise ArchiveError(f"Malformed archive: bad base64 ({exc})") from exc
        return
    if "$dict" in value:
        inner = value["$dict"]
        if not isinstance(inner, dict):
            raise ArchiveError("Malformed archive: $dict must be a mapping")
        children = inner.values()
    elif "$model" in value:
        fields = value.get("$fields", {})
        if not isinstance(value["$model"], str) or not isinstance(fields, dict):
            raise ArchiveError("Malformed archive: nested model needs a name and field mapping")
        children = fields.values()
    else:
        children = value.values()
    for item in children:
        _check_markers(item)
