"""
Domain exceptions and the DRF exception handler that renders every error as
the ``{"success": false, "message": ...}`` envelope.
"""
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    # duplicates are reported as 400, not 409
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


class InvalidCredentials(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid credentials'
    default_code = 'invalid_credentials'


class InvalidOperation(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Operation not allowed.'
    default_code = 'invalid_operation'


class BadRequest(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request.'
    default_code = 'bad_request'


def flatten_detail(detail):
    """
    Collapse a DRF error detail (string, list or field dict, possibly nested)
    into one readable sentence.
    """
    if isinstance(detail, dict):
        if 'detail' in detail:
            return flatten_detail(detail['detail'])
        parts = []
        for field, value in detail.items():
            message = flatten_detail(value)
            if field == 'non_field_errors':
                parts.append(message)
            else:
                parts.append(f"{field}: {message}")
        return '; '.join(parts)
    if isinstance(detail, (list, tuple)):
        return '; '.join(flatten_detail(item) for item in detail)
    return str(detail)


def envelope_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(exc, APIException):
            message = flatten_detail(exc.detail)
        elif isinstance(exc, Http404):
            message = 'Not found.'
        elif isinstance(exc, DjangoPermissionDenied):
            message = 'You do not have permission to perform this action.'
        else:
            message = flatten_detail(response.data)
        response.data = {'success': False, 'message': message}
        return response

    view = context.get('view')
    logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}")
    return Response(
        {'success': False, 'message': str(exc) or 'Server Error'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
