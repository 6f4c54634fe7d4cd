"""
Error normalisation for the API.

Every error leaves the API as ``{"error": "<message>"}``.  Validation
errors additionally carry the per-field messages under ``fields``.
Unexpected failures are logged with their traceback and reported with
the fixed message of the route that failed.
"""
from __future__ import annotations

import functools
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ServiceFailure(APIException):
    """A route could not complete because of an unexpected error."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error'
    default_code = 'server_error'


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


def _first_message(data) -> str:
    if isinstance(data, dict):
        for key, value in data.items():
            message = _first_message(value)
            if key in ('detail', 'non_field_errors'):
                return message
            return f"{key}: {message}"
        return 'Invalid request'
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else 'Invalid request'
    return str(data)


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(exc.message_dict if hasattr(exc, 'error_dict') else exc.messages)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.error('Unhandled error in %s', type(view).__name__, exc_info=exc)
        return Response({'error': ServiceFailure.default_detail}, status=500)
    if isinstance(exc, ValidationError):
        return Response({'error': _first_message(resp.data), 'fields': resp.data}, status=resp.status_code)
    detail = resp.data.get('detail') if isinstance(resp.data, dict) else resp.data
    return Response({'error': _first_message(detail)}, status=resp.status_code)


def failure_message(message: str):
    """Report any unexpected error raised by the view as ``message`` (500).

    API exceptions (validation, not found, conflict) and model
    validation errors pass through untouched.  Apply below ``@api_view``.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(request, *args, **kwargs):
            try:
                return func(request, *args, **kwargs)
            except (APIException, DjangoValidationError, Http404):
                raise
            except Exception as exc:
                logger.exception('%s %s failed', request.method, request.path)
                raise ServiceFailure(message) from exc
        return wrapper
    return decorator


def get_or_404(queryset, pk, message: str):
    """Fetch ``pk`` from ``queryset`` or raise ``NotFound(message)``."""
    obj = queryset.filter(pk=pk).first()
    if obj is None:
        raise NotFound(message)
    return obj
