from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import StoreError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def json_endpoint(view):
    """Map domain errors to JSON responses: invalid input -> 400, store failure -> 503."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StoreError:
            logger.exception("Store failure in %s", view.__name__)
            return jsonify({"success": False, "message": "Storage is unavailable, try again later"}), 503

    return wrapper


def parse_day(value: Optional[str], field_name: str = "date"):
    if not value:
        raise ValidationError(f"{field_name} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


def optional_day(value: Optional[str], field_name: str = "date"):
    return parse_day(value, field_name) if value else None


def body() -> dict[str, Any]:
    """The JSON object sent with the request; anything else reads as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def text_field(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{key} must be text")
    return value


def id_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{key} must be a list of ids")
    return value
