"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Any, Dict, Optional

from flask import request


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract client identity information from request."""
    if request_obj is None:
        request_obj = request

    return {
        'user_ip': getattr(request_obj, 'remote_addr', None) or 'unknown',
        'user_agent': str(getattr(request_obj, 'user_agent', '') or '') or None,
    }


def get_json_body(request_obj=None) -> Dict[str, Any]:
    """Request JSON body, or an empty dict when missing or not an object."""
    if request_obj is None:
        request_obj = request

    data = request_obj.get_json(silent=True)
    return data if isinstance(data, dict) else {}
