"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Any, Dict, Optional
from flask import request


def get_json_body(request_obj=None) -> Dict[str, Any]:
    """Return the JSON object sent with the request, or an empty dict."""
    if request_obj is None:
        request_obj = request

    data = request_obj.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    """
    Read an optional integer field from a JSON body.

    Raises:
        ValueError: If the field is present but not an integer
    """
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"'{key}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' must be an integer")
