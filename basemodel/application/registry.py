from __future__ import annotations

import logging
import threading
from typing import Any, Optional, TypeVar

from .notifications import NotificationCenter
from .persistence import PersistenceManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SharedInstanceRegistry:
    """
    One shared instance per concrete model type.

    Slots start empty, are filled lazily by ``get`` from the type's save or
    resource file, and can be replaced with ``set`` or rebuilt with
    ``reload``. Each type has its own lock; change notifications go out
    after that lock is released.
    """

    def __init__(self, persistence: PersistenceManager, notifications: NotificationCenter):
        self._persistence = persistence
        self._notifications = notifications
        self._slots: dict[type, Any] = {}
        self._locks: dict[type, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def notifications(self) -> NotificationCenter:
        return self._notifications

    def _lock_for(self, model_type: type) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(model_type)
            if lock is None:
                lock = self._locks[model_type] = threading.RLock()
            return lock

    def has(self, model_type: type) -> bool:
        with self._lock_for(model_type):
            return model_type in self._slots

    def get(self, model_type: type[T]) -> T:
        with self._lock_for(model_type):
            if model_type not in self._slots:
                logger.debug("Creating shared instance of %s", model_type.__name__)
                self._slots[model_type] = self._persistence.load_shared(model_type)
            return self._slots[model_type]

    def set(self, model_type: type[T], instance: T) -> None:
        if not isinstance(instance, model_type):
            raise TypeError(
                f"Shared instance of {model_type.__name__} cannot be {type(instance).__name__}"
            )
        with self._lock_for(model_type):
            self._slots[model_type] = instance
        logger.debug("Shared instance of %s replaced", model_type.__name__)
        self._notifications.post(model_type)

    def reload(self, model_type: type[T]) -> T:
        with self._lock_for(model_type):
            self._slots.pop(model_type, None)
            instance = self._persistence.load_shared(model_type)
            self._slots[model_type] = instance
        logger.debug("Shared instance of %s reloaded", model_type.__name__)
        self._notifications.post(model_type)
        return instance

    def is_shared(self, instance: Any) -> bool:
        model_type = type(instance)
        with self._lock_for(model_type):
            return self._slots.get(model_type) is instance

    def clear(self, model_type: Optional[type] = None) -> None:
        if model_type is not None:
            with self._lock_for(model_type):
                self._slots.pop(model_type, None)
            return
        with self._locks_guard:
            types = list(self._locks)
        for slot_type in types:
            with self._lock_for(slot_type):
                self._slots.pop(slot_type, None)
