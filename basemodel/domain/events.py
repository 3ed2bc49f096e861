from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SharedInstanceUpdated:
    model_type: type

    @property
    def type_name(self) -> str:
        return f"{self.model_type.__module__}.{self.model_type.__qualname__}"
