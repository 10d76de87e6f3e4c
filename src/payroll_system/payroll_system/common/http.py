from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from flask import jsonify

from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date
from .money import to_decimal

logger = logging.getLogger(__name__)


def to_json(value: Any) -> Any:
    """Convert dataclasses and domain scalars into JSON-friendly values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    if isinstance(value, bytes):
        return None
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    return value


def status_for(exc: Exception) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    return 500


def error_response(exc: Exception):
    code = status_for(exc)
    if code == 500:
        logger.exception("[http] unhandled error")
        message = "Internal server error" if not isinstance(exc, DomainError) else str(exc)
    else:
        message = str(exc)
    return jsonify({"success": False, "message": message}), code


def required_int(data: dict, key: str) -> int:
    try:
        return int(data[key])
    except (KeyError, TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer") from None


def required_date(data: dict, key: str) -> date:
    try:
        return parse_iso_date(str(data[key]))
    except (KeyError, ValueError):
        raise ValidationError(f"{key} must be a date (YYYY-MM-DD)") from None


def optional_date(data: dict, key: str) -> Optional[date]:
    if data.get(key) in (None, ""):
        return None
    return required_date(data, key)


def optional_decimal(data: dict, key: str) -> Decimal:
    try:
        return to_decimal(data.get(key))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{key} must be a number") from None


def required_choice(data: dict, key: str, enum_cls: type[Enum]) -> Enum:
    try:
        return enum_cls(data[key])
    except (KeyError, ValueError):
        choices = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{key} must be one of: {choices}") from None
