"""
Error taxonomy. Stores raise these, the app's error handlers turn them into
`{"error": message}` responses with the matching status code.
"""


class AppError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """A required field is missing or malformed."""
    status_code = 400
    default_message = 'Invalid request'


class NotFound(AppError):
    status_code = 404
    default_message = 'Not found'


class InternalError(AppError):
    """Storage failure. The message is logged, the client only sees the generic text."""
    status_code = 500
