"""
API error envelope.
Every error leaves the API as {"success": false, "error": "<message>"}.
"""
import logging
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = 'Internal server error'


def _first_message(data):
    """Pull the first human readable message out of DRF error data."""
    if isinstance(data, dict):
        if 'detail' in data:
            return _first_message(data['detail'])
        for value in data.values():
            return _first_message(value)
        return ''
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ''
    return str(data)


def envelope_exception_handler(exc, context):
    """
    DRF exception handler that wraps errors in the API envelope.

    Known errors keep their status code (400 validation, 403, 404, ...).
    Django ValidationError raised from services maps to 400.
    Anything else is logged here and answered with a generic 500; the
    exception text is never sent to the client.
    """
    if isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(detail=exc.messages)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}",
            exc_info=exc
        )
        message = getattr(view, 'failure_message', DEFAULT_FAILURE_MESSAGE)
        return Response(
            {'success': False, 'error': message},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    response.data = {'success': False, 'error': _first_message(response.data)}
    return response
