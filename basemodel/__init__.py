from .application import (
    ModelContainer,
    NotificationCenter,
    PersistenceManager,
    Settings,
    SharedInstanceRegistry,
    configure_logging,
    construct,
    construct_from_file,
    create_container,
    get_container,
    load_settings,
    set_container,
    use_container,
)
from .domain import SharedInstanceUpdated, has_hook, implemented_hooks
from .infrastructure import ArchiveError, Decoder, Encoder, register_model_type
from .models import BaseModel

__all__ = [
    "BaseModel",
    "ModelContainer",
    "NotificationCenter",
    "PersistenceManager",
    "Settings",
    "SharedInstanceRegistry",
    "SharedInstanceUpdated",
    "ArchiveError",
    "Decoder",
    "Encoder",
    "configure_logging",
    "construct",
    "construct_from_file",
    "create_container",
    "get_container",
    "has_hook",
    "implemented_hooks",
    "load_settings",
    "register_model_type",
    "set_container",
    "use_container",
]
