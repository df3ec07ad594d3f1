import logging

from rest_framework import status
from rest_framework.response import Response

from fleet.exceptions import (
    FleetError, ValidationFailed, PreconditionFailed, NotFound, InvalidTransition, StoreFailure
)
from fleet.services.types import Principal

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = (
    (NotFound, status.HTTP_404_NOT_FOUND),
    (StoreFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (InvalidTransition, status.HTTP_400_BAD_REQUEST),
    (PreconditionFailed, status.HTTP_400_BAD_REQUEST),
    (ValidationFailed, status.HTTP_400_BAD_REQUEST),
)


def error_response(exc: FleetError) -> Response:
    http_status = status.HTTP_400_BAD_REQUEST
    for error_class, code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            http_status = code
            break

    body = {'error': exc.message, 'code': exc.code}
    if isinstance(exc, InvalidTransition):
        body['current_status'] = exc.current_status
        body['requested_status'] = exc.requested_status
    return Response(body, status=http_status)


class ServiceCallMixin:
    """
    Runs a core service call on behalf of the request user and turns
    FleetError into an error response.
    """

    def handle_service_call(self, operation, serializer_class=None, success_status=status.HTTP_200_OK):
        try:
            principal = Principal.from_user(self.request.user)
            result = operation(principal)
        except FleetError as e:
            if isinstance(e, StoreFailure):
                logger.error(f"{self.__class__.__name__}.{self.action} failed: {e.message}")
            return error_response(e)

        serializer_class = serializer_class or self.get_serializer_class()
        return Response(serializer_class(result, context=self.get_serializer_context()).data,
                        status=success_status)
