"""
Models Package
Export all API models for easy imports
"""
from .breakdown import (
    TaskBreakdownRequest,
    TaskBreakdownResponse,
    ErrorResponse
)

__all__ = [
    "TaskBreakdownRequest",
    "TaskBreakdownResponse",
    "ErrorResponse",
]
