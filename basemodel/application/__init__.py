from .config import Settings, configure_logging, load_settings
from .container import ModelContainer, create_container, get_container, set_container, use_container
from .initializer import construct, construct_from_file, initialize
from .notifications import NotificationCenter
from .persistence import PersistenceManager
from .registry import SharedInstanceRegistry

__all__ = [
    "Settings",
    "configure_logging",
    "load_settings",
    "ModelContainer",
    "create_container",
    "get_container",
    "set_container",
    "use_container",
    "construct",
    "construct_from_file",
    "initialize",
    "NotificationCenter",
    "PersistenceManager",
    "SharedInstanceRegistry",
]
