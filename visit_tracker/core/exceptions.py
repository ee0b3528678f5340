"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.
"""


class VisitTrackerException(Exception):
    """Base exception for the visit tracker service."""
    pass


class DatabaseError(VisitTrackerException):
    """Raised when database operations fail."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
