"""
People registry: owns students and instructors by identifier.
"""

import logging
import threading
from typing import Dict, List, Optional

from ..core.entities import Instructor, Person, Student
from ..core.exceptions import DuplicateEntityError, ValidationError

logger = logging.getLogger(__name__)


class PeopleRegistry:
    """Keeps the students and instructors known to the platform."""

    def __init__(self):
        self._students: Dict[str, Student] = {}
        self._instructors: Dict[str, Instructor] = {}
        self._lock = threading.RLock()

    def register_student(self, first_name: str, last_name: str, major: str) -> Student:
        student = Student(first_name, last_name, major)
        self.add(student)
        return student

    def register_instructor(self, first_name: str, last_name: str, department: str) -> Instructor:
        instructor = Instructor(first_name, last_name, department)
        self.add(instructor)
        return instructor

    def add(self, person: Person) -> Person:
        """Register a person constructed elsewhere."""
        if isinstance(person, Student):
            registry = self._students
        elif isinstance(person, Instructor):
            registry = self._instructors
        else:
            raise ValidationError(f"Unsupported person type: {person.__class__.__name__}")

        with self._lock:
            if person.id in registry:
                raise DuplicateEntityError(f"{person.role} {person.id} is already registered")
            registry[person.id] = person

        logger.info("Registered %s %s (%s)", person.role.lower(), person.full_name, person.id)
        return person

    def get_student(self, student_id: str) -> Optional[Student]:
        with self._lock:
            return self._students.get(student_id)

    def get_instructor(self, instructor_id: str) -> Optional[Instructor]:
        with self._lock:
            return self._instructors.get(instructor_id)

    def list_students(self) -> List[Student]:
        with self._lock:
            return list(self._students.values())

    def list_instructors(self) -> List[Instructor]:
        with self._lock:
            return list(self._instructors.values())
