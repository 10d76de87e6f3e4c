from __future__ import annotations

import logging
import uuid
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import ImportProgress
from .reconciler import PunchReconciler
from .repository import ImportJobRepository
from .runner import ImportJobRunner

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".xlsx", ".xlsm")


class AttendanceImportService:
    """Accepts punch exports and reports reconciliation progress."""

    def __init__(self, jobs: ImportJobRepository, reconciler: PunchReconciler, runner: ImportJobRunner):
        self._jobs = jobs
        self._reconciler = reconciler
        self._runner = runner

    def upload(self, *, file_name: Optional[str], content: Optional[bytes]) -> str:
        name = require_non_empty(file_name or "", "File name")
        if not name.lower().endswith(ALLOWED_EXTENSIONS):
            raise ValidationError("Only .xlsx files are supported")
        if not content:
            raise ValidationError("Please select a file to upload")

        import_id = str(uuid.uuid4())
        self._jobs.create(import_id=import_id, file_name=name, file_content=content, created_at=now_utc())
        self._runner.submit(import_id, self._reconciler.run)
        logger.info("[import] queued id=%s file=%s bytes=%s", import_id, name, len(content))
        return import_id

    def check_progress(self, import_id: str) -> ImportProgress:
        job = self._jobs.get(import_id)
        if not job:
            raise NotFoundError(f"Import {import_id} not found")
        return ImportProgress.from_job(job)

    def cancel(self, import_id: str) -> bool:
        if not self._jobs.get(import_id):
            raise NotFoundError(f"Import {import_id} not found")
        return self._runner.cancel(import_id)
