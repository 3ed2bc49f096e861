from .capabilities import (
    ENCODE_WITH_ENCODER,
    HOOKS,
    SET_UP,
    SET_WITH_DECODER,
    SET_WITH_DICT,
    SET_WITH_LIST,
    SupportsDecoder,
    SupportsDict,
    SupportsEncoder,
    SupportsList,
    SupportsSetUp,
    call_hook,
    has_hook,
    implemented_hooks,
)
from .events import SharedInstanceUpdated

__all__ = [
    "HOOKS",
    "SET_UP",
    "SET_WITH_DICT",
    "SET_WITH_LIST",
    "SET_WITH_DECODER",
    "ENCODE_WITH_ENCODER",
    "SupportsSetUp",
    "SupportsDict",
    "SupportsList",
    "SupportsDecoder",
    "SupportsEncoder",
    "has_hook",
    "call_hook",
    "implemented_hooks",
    "SharedInstanceUpdated",
]
