"""
Error kinds raised by the service layer.

Resources turn them into ``{"message": ...}, status`` responses through
``voozea.utils.decorators.service_errors``.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_response(self):
        return {"message": self.message}, self.status_code


class ValidationError(ServiceError):
    """Malformed or semantically invalid input."""
    status_code = 400


class AuthorizationError(ServiceError):
    """The principal may not perform the action (or act as the entity)."""
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    """Duplicate edge, taken slug/username, double claim."""
    status_code = 409


class StoreError(ServiceError):
    """Unclassified database failure."""
    status_code = 500
