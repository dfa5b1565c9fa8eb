"""Unit tests for CourseRegistry."""

import pytest

from registrar.core.exceptions import DuplicateEntityError, ResourceNotFoundError, ValidationError
from registrar.services import CourseRegistry


class TestCreateAndLookup:
    """Tests for course creation and lookup."""

    def test_create_course_registers_it(self, course_registry: CourseRegistry) -> None:
        course = course_registry.create_course("OOP101", "Object-Oriented Programming", 3)

        assert course_registry.get_course_by_id(course.id) is course
        assert course.id in course_registry
        assert len(course_registry) == 1

    def test_create_course_with_zero_capacity_raises(self, course_registry: CourseRegistry) -> None:
        with pytest.raises(ValidationError):
            course_registry.create_course("BAD", "Bad", 0)

        assert len(course_registry) == 0

    def test_unknown_id_returns_none(self, course_registry: CourseRegistry) -> None:
        assert course_registry.get_course_by_id("missing") is None

    def test_get_by_code_ignores_case(self, course_registry: CourseRegistry) -> None:
        course = course_registry.create_course("OOP101", "Object-Oriented Programming", 3)

        assert course_registry.get_course_by_code("oop101") is course

    def test_get_by_code_returns_first_duplicate(self, course_registry: CourseRegistry) -> None:
        """Test that duplicate codes are allowed and the first one registered wins."""
        first = course_registry.create_course("OOP101", "First", 3)
        course_registry.create_course("oop101", "Second", 3)

        assert course_registry.get_course_by_code("OOP101") is first
        assert len(course_registry) == 2

    def test_get_by_unknown_code_returns_none(self, course_registry: CourseRegistry) -> None:
        assert course_registry.get_course_by_code("NOPE") is None

    def test_unique_codes_rejects_duplicate(self) -> None:
        registry = CourseRegistry(unique_codes=True)
        registry.create_course("OOP101", "First", 3)

        with pytest.raises(DuplicateEntityError):
            registry.create_course("oop101", "Second", 3)

        assert len(registry) == 1


class TestListingAndSorting:
    """Tests for listing and title ordering."""

    def test_list_courses_is_a_snapshot(self, course_registry: CourseRegistry) -> None:
        course_registry.create_course("A1", "Alpha", 1)
        listing = course_registry.list_courses()

        course_registry.create_course("B1", "Beta", 1)

        assert len(listing) == 1
        assert len(course_registry.list_courses()) == 2

    def test_sort_by_title(self, course_registry: CourseRegistry) -> None:
        course_registry.create_course("OOP101", "Object-Oriented Programming", 3)
        course_registry.create_course("ALG201", "Algorithms", 2)
        course_registry.create_course("DB301", "Databases", 2)

        titles = [c.title for c in course_registry.sort_by_title()]

        assert titles == ["Algorithms", "Databases", "Object-Oriented Programming"]

    def test_sort_by_title_is_case_sensitive(self, course_registry: CourseRegistry) -> None:
        course_registry.create_course("L1", "algebra", 1)
        course_registry.create_course("U1", "Zoology", 1)

        titles = [c.title for c in course_registry.sort_by_title()]

        assert titles == ["Zoology", "algebra"]

    def test_sort_by_title_is_stable(self, course_registry: CourseRegistry) -> None:
        first = course_registry.create_course("X1", "Same", 1)
        second = course_registry.create_course("X2", "Same", 1)

        assert course_registry.sort_by_title() == [first, second]


class TestDeleteAndAssign:
    """Tests for deletion and instructor assignment."""

    def test_delete_course(self, course_registry: CourseRegistry) -> None:
        course = course_registry.create_course("OOP101", "OOP", 3)

        assert course_registry.delete_course(course.id) is True
        assert course_registry.get_course_by_id(course.id) is None
        assert course_registry.delete_course(course.id) is False

    def test_delete_does_not_cascade(self, course_registry, enrollment_service, students) -> None:
        """Test that enrollments keep pointing at a deleted course."""
        course = course_registry.create_course("OOP101", "OOP", 3)
        enrollment = enrollment_service.enroll(students[0], course)

        course_registry.delete_course(course.id)

        assert enrollment_service.find_by_student(students[0]) == [enrollment]
        assert enrollment.course is course

    def test_assign_instructor(self, course_registry: CourseRegistry, instructor) -> None:
        course = course_registry.create_course("OOP101", "OOP", 3)

        course_registry.assign_instructor(course.id, instructor)

        assert course.instructor is instructor

    def test_same_instructor_on_several_courses(self, course_registry: CourseRegistry, instructor) -> None:
        first = course_registry.create_course("OOP101", "OOP", 3)
        second = course_registry.create_course("ALG201", "Algorithms", 2)

        course_registry.assign_instructor(first.id, instructor)
        course_registry.assign_instructor(second.id, instructor)

        assert first.instructor is second.instructor

    def test_assign_instructor_unknown_course_raises(self, course_registry: CourseRegistry, instructor) -> None:
        with pytest.raises(ResourceNotFoundError):
            course_registry.assign_instructor("missing", instructor)
