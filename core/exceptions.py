# core/exceptions.py
import logging

from rest_framework import exceptions
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(data):
    """Pull a single human readable message out of a DRF error payload."""
    if isinstance(data, dict):
        if 'detail' in data:
            return _first_message(data['detail'])
        for field, value in data.items():
            message = _first_message(value)
            return f"{field}: {message}" if field != 'non_field_errors' else message
        return ''
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ''
    return str(data)


def api_exception_handler(exc, context):
    """Render every API error as {"error": "<message>"}."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.NotAuthenticated):
        message = 'Missing authorization header'
    elif isinstance(exc, exceptions.AuthenticationFailed):
        message = 'Invalid or expired token'
    else:
        message = _first_message(response.data)

    if response.status_code >= 500:
        logger.error(f"[API_ERROR] {exc.__class__.__name__}: {message}")
    response.data = {'error': message}
    return response
