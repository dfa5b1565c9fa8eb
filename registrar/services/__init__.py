"""
Services module containing the stateful registries and the enrollment engine.
"""

from .course_registry import CourseRegistry
from .enrollment_service import EnrollmentService
from .people_registry import PeopleRegistry

__all__ = [
    "CourseRegistry",
    "EnrollmentService",
    "PeopleRegistry",
]
