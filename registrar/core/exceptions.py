"""
Custom exceptions for the Registrar platform.
"""

from typing import Optional, Any, Dict


class RegistrarException(Exception):
    """Base exception for all Registrar-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(RegistrarException):
    """Raised when data validation fails."""
    pass


class ResourceNotFoundError(RegistrarException):
    """Raised when a requested resource is not found."""
    pass


class DuplicateEntityError(RegistrarException):
    """Raised when attempting to create a duplicate entity."""
    pass


class EnrollmentError(RegistrarException):
    """Raised when enrollment operations fail."""
    pass


class CourseFullError(EnrollmentError):
    """Raised when enrolling into a course that has reached its capacity."""

    def __init__(self, course_code: str, capacity: int):
        super().__init__(
            f"Course {course_code} is full",
            error_code="course_full",
            details={'course_code': course_code, 'capacity': capacity}
        )


class DuplicateEnrollmentError(EnrollmentError):
    """Raised when a student already holds an active enrollment in the course."""

    def __init__(self, student_name: str, course_code: str):
        super().__init__(
            f"{student_name} is already enrolled in {course_code}",
            error_code="duplicate_enrollment",
            details={'student': student_name, 'course_code': course_code}
        )
