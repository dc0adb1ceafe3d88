"""
Custom exception handlers for DRF.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from shared.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
    BusinessRuleViolationError,
    InvalidOperationError,
)

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """Map domain exceptions to HTTP responses."""
    # DRF's own exceptions (parse errors, serializer validation, ...) first
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, EntityNotFoundError):
        return Response(
            {
                'error': exc.message,
                'code': exc.code,
                'entity': exc.entity_name,
                'entity_id': exc.entity_id,
            },
            status=status.HTTP_404_NOT_FOUND,
        )

    if isinstance(exc, ValidationError):
        return Response(
            {
                'error': exc.message,
                'code': exc.code,
                'field': exc.field,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, BusinessRuleViolationError):
        return Response(
            {
                'error': exc.message,
                'code': exc.code,
                'rule': exc.rule,
            },
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    if isinstance(exc, InvalidOperationError):
        return Response(
            {
                'error': exc.message,
                'code': exc.code,
                'operation': exc.operation,
                'state': exc.state,
            },
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, DomainException):
        return Response(
            {
                'error': exc.message,
                'code': exc.code,
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    logger.error("Unhandled exception in %s", context.get('view'), exc_info=exc)
    return response
