from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

METRICS_LOGGER = "basemodel.metrics"


class MetricsClient:
    """
    One JSON line per persistence action, naming the model type and file.

    ``span`` yields a dict the caller may fill with extra details (for
    example the archive size) before the line is written.
    """

    def __init__(self, *, enabled: bool = True):
        self.enabled = enabled
        self._logger = logging.getLogger(METRICS_LOGGER)

    def _emit(self, action: str, model_type: type, path: Path, elapsed_ms: float, ok: bool, details: dict) -> None:
        record: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "action": action,
            "model": model_type.__name__,
            "path": str(path),
            "elapsed_ms": round(elapsed_ms, 3),
            "ok": ok,
        }
        record.update(details)
        self._logger.info(json.dumps(record, ensure_ascii=False, default=str))

    @contextmanager
    def span(self, action: str, *, model_type: type, path: Path) -> Iterator[dict]:
        details: dict[str, Any] = {}
        if not self.enabled:
            yield details
            return
        start = time.perf_counter()
        ok = True
        try:
            yield details
        except Exception:
            ok = False
            raise
        finally:
            self._emit(action, model_type, path, (time.perf_counter() - start) * 1000, ok, details)
