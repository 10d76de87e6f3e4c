from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class Shift:
    """Domain entity: work shift. end_time < start_time means an overnight shift."""

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    is_active: bool = True

    @property
    def is_overnight(self) -> bool:
        return self.end_time < self.start_time
