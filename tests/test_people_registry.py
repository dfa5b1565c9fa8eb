"""Unit tests for PeopleRegistry."""

import pytest

from registrar.core.entities import Instructor, Student
from registrar.core.exceptions import DuplicateEntityError, ValidationError


class TestPeopleRegistry:
    """Tests for PeopleRegistry."""

    def test_register_student(self, people_registry) -> None:
        student = people_registry.register_student("Ainur", "K", "CS")

        assert isinstance(student, Student)
        assert people_registry.get_student(student.id) is student
        assert people_registry.get_instructor(student.id) is None

    def test_register_instructor(self, people_registry) -> None:
        instructor = people_registry.register_instructor("Ivan", "Petrov", "Computer Science")

        assert isinstance(instructor, Instructor)
        assert people_registry.list_instructors() == [instructor]

    def test_add_external_person(self, people_registry, students) -> None:
        for student in students:
            people_registry.add(student)

        assert people_registry.list_students() == students

    def test_add_twice_raises(self, people_registry, instructor) -> None:
        people_registry.add(instructor)

        with pytest.raises(DuplicateEntityError):
            people_registry.add(instructor)

    def test_invalid_name_raises(self, people_registry) -> None:
        with pytest.raises(ValidationError):
            people_registry.register_student("Ainur", "", "CS")

        assert people_registry.list_students() == []

    def test_unknown_ids_return_none(self, people_registry) -> None:
        assert people_registry.get_student("missing") is None
        assert people_registry.get_instructor("missing") is None
