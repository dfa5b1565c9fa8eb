"""
Core module containing the fundamental object model.
"""

from .entities import *
from .exceptions import *
from .enums import *

__all__ = [
    # Entities
    "AbstractEntity",
    "Person",
    "Student",
    "Instructor",
    "Course",
    "Enrollment",

    # Enums
    "PersonType",
    "EnrollmentStatus",

    # Exceptions
    "RegistrarException",
    "ValidationError",
    "ResourceNotFoundError",
    "DuplicateEntityError",
    "EnrollmentError",
    "CourseFullError",
    "DuplicateEnrollmentError",
]
