"""Errors raised by the scheduling services.

Each error carries the HTTP status and the message returned to the client as
``{"error": message}``.
"""

from fastapi import status


class SchedulingError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Request could not be processed'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SchedulingError):
    default_message = 'Validation fails'


class AuthenticationError(SchedulingError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Token invalid'


class AuthorizationError(SchedulingError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Operation not permitted'


class PastDateError(SchedulingError):
    default_message = 'Past dates are not permitted'


class ConflictError(SchedulingError):
    default_message = 'Appointment date is not available'


class NotFoundError(SchedulingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Appointment not found'


class AlreadyCanceledError(SchedulingError):
    default_message = 'Appointment has already been canceled'


class ServiceUnavailableError(SchedulingError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = 'Database unavailable. Verify DATABASE_URL and database credentials.'
