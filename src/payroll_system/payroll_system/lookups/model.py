from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Lookup:
    """Configurable lookup value, e.g. (lookup_type="Weekend", lookup_value="Friday")."""

    lookup_id: int
    lookup_type: str
    lookup_value: str
    display_order: int = 0
    is_active: bool = True
