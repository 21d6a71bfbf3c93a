# Error taxonomy shared by every ledger service.
# Services raise these; app.main renders them as {"success": false, "error": ...}
# with the status code carried by the class.

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP response"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidReactionType(ValidationError):
    def __init__(self, raw_type=None, allowed=None):
        allowed = allowed or []
        super().__init__(f"Invalid reaction type. Must be one of: {', '.join(allowed)}")
        self.raw_type = raw_type


class EmptyContent(ValidationError):
    default_message = "Comment content is required"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class TargetNotFound(NotFoundError):
    default_message = "Target not found"


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not enough permissions"


class NotAuthorized(AuthorizationError):
    pass


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflicting write"


class UnexpectedError(AppError):
    pass
