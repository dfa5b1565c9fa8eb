"""
Enumerations for the Registrar platform.
"""

from enum import Enum


class PersonType(Enum):
    """Types of persons in the system."""
    STUDENT = "student"
    INSTRUCTOR = "instructor"


class EnrollmentStatus(Enum):
    """Status of an enrollment."""
    ENROLLED = "enrolled"
    COMPLETED = "completed"
    DROPPED = "dropped"
