"""
Exception hierarchy for EduHub.

Every error raised by the service and access-control layers derives from
EduHubException and carries the HTTP status it maps to. The application
renders them as {"error": message}.
"""


class EduHubException(Exception):
    """Base exception for EduHub."""
    status_code: int = 500

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(EduHubException):
    """Malformed or out-of-range input."""
    status_code = 400

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, self.status_code)


class AuthenticationError(EduHubException):
    """Missing, invalid or expired credentials."""
    status_code = 401

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, self.status_code)


class InvalidToken(AuthenticationError):
    def __init__(self, message: str = "Not authorized, token failed"):
        super().__init__(message)


class AccountNotFound(AuthenticationError):
    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class AccountDeactivated(AuthenticationError):
    def __init__(self, message: str = "Account is deactivated"):
        super().__init__(message)


class InvalidCredentials(AuthenticationError):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AuthorizationError(EduHubException):
    """
    Raised when the caller is authenticated but not allowed to act.

    Examples:
    - A student creating a course
    - An instructor editing a course they do not own
    """
    status_code = 403

    def __init__(self, message: str = "Access forbidden"):
        super().__init__(message, self.status_code)


class Forbidden(AuthorizationError):
    pass


class NotFoundError(EduHubException):
    """
    Raised when requested resource doesn't exist.
    """
    status_code = 404

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, self.status_code)


class ConflictError(EduHubException):
    """
    Raised when an action conflicts with the current state.

    Reported as 400 to match the rest of the API's client-error contract.
    """
    status_code = 400

    def __init__(self, message: str = "Conflicting request"):
        super().__init__(message, self.status_code)


class AlreadyEnrolled(ConflictError):
    def __init__(self, message: str = "Already enrolled in this course"):
        super().__init__(message)


class NotEnrolled(ConflictError):
    def __init__(self, message: str = "Not enrolled in this course"):
        super().__init__(message)


class AlreadyCompleted(ConflictError):
    def __init__(self, message: str = "Course already completed"):
        super().__init__(message)


class DuplicateEmail(ConflictError):
    def __init__(self, message: str = "User already exists with this email"):
        super().__init__(message)


class InternalError(EduHubException):
    """Unexpected persistence or server failure."""
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, self.status_code)
