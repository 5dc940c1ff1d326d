import logging

from django.db import DatabaseError, IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ReportGenerationFailed(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Failed to generate the report. Please try again.'
    default_code = 'report_generation_failed'


def exception_handler(exc, context):
    """
    DRF exception handler that also reports database failures to the client
    with the store's message instead of letting them become bare 500s.
    """
    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    view_name = view.__class__.__name__ if view else 'unknown view'

    if isinstance(exc, IntegrityError):
        logger.warning(f"Store rejected write in {view_name}: {exc}")
        return Response({"error": f"Operation conflicts with existing data: {exc}"}, status=status.HTTP_409_CONFLICT)

    if isinstance(exc, DatabaseError):
        logger.error(f"Store error in {view_name}: {exc}")
        return Response({"error": f"Data store error: {exc}"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    return None
