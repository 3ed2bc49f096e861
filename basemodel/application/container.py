from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from ..infrastructure.metrics import MetricsClient
from .config import Settings, load_settings
from .notifications import NotificationCenter
from .persistence import PersistenceManager
from .registry import SharedInstanceRegistry

logger = logging.getLogger(__name__)


class ModelContainer:
    def __init__(
        self,
        *,
        settings: Settings,
        persistence: PersistenceManager,
        notifications: NotificationCenter,
        registry: SharedInstanceRegistry,
    ):
        self.settings = settings
        self.persistence = persistence
        self.notifications = notifications
        self.registry = registry


def create_container(settings: Optional[Settings] = None, *, metrics: Optional[MetricsClient] = None) -> ModelContainer:
    settings = settings or load_settings()
    persistence = PersistenceManager(settings, metrics)
    notifications = NotificationCenter()
    registry = SharedInstanceRegistry(persistence, notifications)
    return ModelContainer(
        settings=settings,
        persistence=persistence,
        notifications=notifications,
        registry=registry,
    )


_current: Optional[ModelContainer] = None
_current_lock = threading.Lock()


def get_container() -> ModelContainer:
    """Process-wide container, created from the environment on first use."""
    global _current
    with _current_lock:
        if _current is None:
            logger.info("Creating default model container")
            _current = create_container()
        return _current


def set_container(container: Optional[ModelContainer]) -> None:
    global _current
    with _current_lock:
        _current = container


@contextmanager
def use_container(container: ModelContainer) -> Iterator[ModelContainer]:
    global _current
    with _current_lock:
        previous = _current
        _current = container
    try:
        yield container
    finally:
        with _current_lock:
            _current = previous
