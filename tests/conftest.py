"""Pytest configuration and shared fixtures."""

import pytest

from registrar.core.entities import Instructor, Student
from registrar.services import CourseRegistry, EnrollmentService, PeopleRegistry


@pytest.fixture
def course_registry() -> CourseRegistry:
    """Create an empty course registry."""
    return CourseRegistry()


@pytest.fixture
def enrollment_service() -> EnrollmentService:
    """Create an enrollment service with no enrollments."""
    return EnrollmentService()


@pytest.fixture
def people_registry() -> PeopleRegistry:
    """Create an empty people registry."""
    return PeopleRegistry()


@pytest.fixture
def students() -> list:
    """Four students, A to D."""
    return [
        Student("Ainur", "K", "CS"),
        Student("Dana", "S", "CS"),
        Student("Erlan", "T", "Math"),
        Student("Madina", "B", "Math"),
    ]


@pytest.fixture
def instructor() -> Instructor:
    return Instructor("Ivan", "Petrov", "Computer Science")
