from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import ImportStatus
from .model import ImportJob


class ImportJobRepository(Protocol):
    def create(self, *, import_id: str, file_name: str, file_content: bytes, created_at: datetime) -> None:
        raise NotImplementedError

    def get(self, import_id: str) -> Optional[ImportJob]:
        raise NotImplementedError

    def update_progress(
        self,
        import_id: str,
        *,
        processed: int,
        total: int,
        status: ImportStatus,
        error_log: Optional[str] = None,
    ) -> None:
        """Store progress.

        total is only written when > 0 and error_log only when given; reaching a
        terminal status stamps completed_at.
        """

        raise NotImplementedError
