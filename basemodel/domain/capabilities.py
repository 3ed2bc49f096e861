from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

SET_UP = "set_up"
SET_WITH_DICT = "set_with_dict"
SET_WITH_LIST = "set_with_list"
SET_WITH_DECODER = "set_with_decoder"
ENCODE_WITH_ENCODER = "encode_with_encoder"

HOOKS = (SET_UP, SET_WITH_DICT, SET_WITH_LIST, SET_WITH_DECODER, ENCODE_WITH_ENCODER)


@runtime_checkable
class SupportsSetUp(Protocol):
    def set_up(self) -> None: ...


@runtime_checkable
class SupportsDict(Protocol):
    def set_with_dict(self, mapping: Mapping[str, Any]) -> None: ...


@runtime_checkable
class SupportsList(Protocol):
    def set_with_list(self, sequence: Sequence[Any]) -> None: ...


@runtime_checkable
class SupportsDecoder(Protocol):
    def set_with_decoder(self, decoder: Any) -> None: ...


@runtime_checkable
class SupportsEncoder(Protocol):
    def encode_with_encoder(self, encoder: Any) -> None: ...


def has_hook(obj: Any, name: str) -> bool:
    """
    Capability query: does *obj* (instance or type) implement hook *name*?

    Hooks are optional. A model that leaves one out simply skips that step.
    """
    if name not in HOOKS:
        raise ValueError(f"Unknown model hook: {name}")
    return callable(getattr(obj, name, None))


def call_hook(obj: Any, name: str, *args: Any) -> bool:
    """Invoke hook *name* when implemented. Returns whether it ran."""
    if not has_hook(obj, name):
        return False
    getattr(obj, name)(*args)
    return True


def implemented_hooks(obj: Any) -> tuple[str, ...]:
    return tuple(name for name in HOOKS if has_hook(obj, name))
