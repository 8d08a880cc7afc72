from typing import Optional


class TaskBreakdownError(Exception):
    """Base error for the task breakdown pipeline"""
    pass


class ValidationError(TaskBreakdownError):
    """Raised when the incoming request does not carry a usable description"""
    pass


class ProviderError(TaskBreakdownError):
    """
    Raised when the language-model provider does not return a successful completion.

    The string form is safe to show to callers. The provider's response body is kept
    on the instance for logging only.
    """

    def __init__(self, status_code: Optional[int] = None, body: Optional[str] = None, message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        if message is None:
            if status_code is not None:
                message = f"OpenAI API error: {status_code}"
            else:
                message = "OpenAI API error: request failed"
        super().__init__(message)
