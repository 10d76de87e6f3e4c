from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ImportStatus


@dataclass(frozen=True)
class ImportJob:
    """Domain entity: one uploaded punch export and its reconciliation progress."""

    import_id: str
    file_name: str
    file_content: bytes
    status: ImportStatus = ImportStatus.PENDING
    total_rows: int = 0
    processed_rows: int = 0
    error_log: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


@dataclass(frozen=True)
class ImportProgress:
    """Poll view of a job.

    Counts are per phase: Processing counts worksheet rows, Saving counts
    (employee, date) groups and starts again from 0, so the percentage drops
    back when the status changes. It only moves forward within one status.
    """

    status: ImportStatus
    processed_count: int
    total_count: int
    percentage: int
    error_log: Optional[str] = None

    @classmethod
    def from_job(cls, job: ImportJob) -> "ImportProgress":
        percentage = 0
        if job.total_rows > 0:
            percentage = int(job.processed_rows / job.total_rows * 100)
        if job.status == ImportStatus.COMPLETED:
            percentage = 100
        else:
            # 100% is reserved for a completed job.
            percentage = min(percentage, 99)

        return cls(
            status=job.status,
            processed_count=job.processed_rows,
            total_count=job.total_rows,
            percentage=percentage,
            error_log=job.error_log,
        )

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "processedCount": self.processed_count,
            "totalCount": self.total_count,
            "percentage": self.percentage,
            "errorLog": self.error_log,
        }
