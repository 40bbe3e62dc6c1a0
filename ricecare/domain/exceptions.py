"""
Domain error taxonomy.

Classification and model errors propagate verbatim to the caller; the API
middleware turns them into JSON responses using ``status_code``.
"""


class DiagnosticError(Exception):
    """Base class for errors raised by the diagnostic engine."""
    
    status_code: int = 500
    
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class DecodeError(DiagnosticError):
    """Image bytes are malformed or not in an accepted encoding."""
    status_code = 422


class ModelLoadError(DiagnosticError):
    """The inference graph could not be loaded or initialized."""
    status_code = 503


class InferenceError(DiagnosticError):
    """The inference graph failed while executing."""
    status_code = 500


class WeatherAPIError(DiagnosticError):
    """Weather provider request failed or returned an unusable payload."""
    status_code = 502
