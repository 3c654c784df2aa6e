"""
Domain exceptions and the project-wide DRF exception handler.

Every business failure of the booking core is one of five kinds. They are
raised from the service layer and rendered by ``custom_exception_handler``;
anything else (database down, programming errors) propagates untouched.
"""
from rest_framework.views import exception_handler
from rest_framework.exceptions import APIException
from rest_framework import status


class ValidationError(APIException):
    """Missing or malformed input, timing policy or cash cap violations."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid booking request.'
    default_code = 'validation_error'


class ConflictError(APIException):
    """Slot taken or no barber free; the caller should re-fetch slots."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Slot no longer available.'
    default_code = 'conflict'


class AuthorizationError(APIException):
    """Wrong check-in PIN. Kept distinct from NotFoundError."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Invalid PIN.'
    default_code = 'authorization_error'


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'not_found'


class StateError(APIException):
    """Operation not allowed from the current state of the record."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid operation for the current state.'
    default_code = 'invalid_state'


def custom_exception_handler(exc, context):
    """
    Custom exception handler that adds additional context
    """
    response = exception_handler(exc, context)

    if response is not None:
        data = response.data
        message = data.get('detail', str(exc)) if isinstance(data, dict) else str(exc)
        custom_response_data = {
            'error': True,
            'message': message,
            'status_code': response.status_code,
        }
        if isinstance(exc, APIException):
            custom_response_data['code'] = exc.default_code

        # Add field errors if present
        if isinstance(data, dict) and 'detail' not in data:
            custom_response_data['errors'] = data
        elif isinstance(data, list):
            custom_response_data['errors'] = data

        response.data = custom_response_data

    return response
