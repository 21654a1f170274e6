import logging
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def curio_exception_handler(exc, context):
    """
    DRF handles validation / 404 / method errors itself.
    Anything else is an internal error: full detail goes to the log
    (and Sentry), the client only gets a generic message.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception(
        f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}",
        exc_info=exc,
    )
    return Response(
        {"success": False, "error": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
