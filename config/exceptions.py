import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    400: 'Bad Request',
    401: 'Authentication Required',
    403: 'Permission Denied',
    404: 'Not Found',
    405: 'Method Not Allowed',
    500: 'Internal Server Error',
}


def custom_exception_handler(exc, context):
    """
    Consistent error envelope for API responses.

    Exceptions DRF does not know about become a 500 with the same shape,
    so API clients never receive an HTML error page.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception("Unhandled API error in %s", view.__class__.__name__ if view else 'unknown view')
        return Response(
            _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, {'error': str(exc)}),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    details = response.data if isinstance(response.data, dict) else {'error': response.data}
    response.data = _envelope(response.status_code, details)
    return response


def _envelope(status_code, details):
    return {
        'success': False,
        'error': {
            'status_code': status_code,
            'message': ERROR_MESSAGES.get(status_code, 'An error occurred'),
            'details': details,
        },
    }
