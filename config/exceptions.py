"""
Project-wide DRF exception handler.

Domain errors are translated by the views that call the services. Anything
that reaches this handler without being an ``APIException`` is an unexpected
failure: it is logged with its traceback and answered with a generic body so
no internal detail leaks to the client.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    set_rollback()
    view = context.get('view')
    logger.exception(
        "Unhandled error in %s",
        view.__class__.__name__ if view is not None else 'unknown view',
        exc_info=exc,
    )
    return Response(
        {'error': 'Internal server error', 'status': 500},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
