from __future__ import annotations

from typing import Protocol, Sequence

from .model import Lookup


class LookupRepository(Protocol):
    def list_by_type(self, lookup_type: str) -> Sequence[Lookup]:
        raise NotImplementedError
