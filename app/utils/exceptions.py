"""
Domain errors raised by the service layer.

Routers never build error responses themselves; the handlers registered in
``app.main`` turn every ``AppError`` into ``{"message": ...}`` with the
matching status code.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Not authorized"


class ConflictError(AppError):
    status_code = 400
    default_message = "Already exists"


class ServerError(AppError):
    status_code = 500
    default_message = "Server error"
