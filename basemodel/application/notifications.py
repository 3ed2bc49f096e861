from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..domain.events import SharedInstanceUpdated

logger = logging.getLogger(__name__)

Observer = Callable[[SharedInstanceUpdated], None]


class NotificationCenter:
    """
    Broadcasts shared-instance changes to subscribed observers.

    Delivery is synchronous on the posting thread. An observer that raises
    stops delivery and the error reaches the caller of ``post``.
    """

    def __init__(self):
        self._observers: list[tuple[Observer, Optional[type]]] = []
        self._lock = threading.Lock()

    def subscribe(self, observer: Observer, *, model_type: Optional[type] = None) -> Callable[[], None]:
        entry = (observer, model_type)
        with self._lock:
            self._observers.append(entry)

        def unsubscribe() -> None:
            with self._lock:
                if entry in self._observers:
                    self._observers.remove(entry)

        return unsubscribe

    def post(self, model_type: type) -> SharedInstanceUpdated:
        event = SharedInstanceUpdated(model_type)
        with self._lock:
            observers = list(self._observers)
        logger.debug("Posting %s to %d observers", event.type_name, len(observers))
        for observer, wanted in observers:
            if wanted is None or wanted is model_type:
                observer(event)
        return event
