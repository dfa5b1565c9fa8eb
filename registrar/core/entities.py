"""
Core entities for the Registrar platform.

Ownership runs one way: an Enrollment references its Student and Course,
while Students and Courses refer back to their enrollments only by
identifier. The EnrollmentService owns the Enrollment objects themselves.
"""

import math
import uuid
from abc import ABC
from datetime import datetime, timezone
from typing import List, Optional

from .enums import EnrollmentStatus, PersonType
from .exceptions import ValidationError


class AbstractEntity(ABC):
    """Base abstract entity with universal ID, timestamps and versioning."""

    def __init__(self, entity_id: Optional[str] = None):
        self._id = entity_id or str(uuid.uuid4())
        self._created_at = datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1

    @property
    def id(self) -> str:
        """Get the entity ID."""
        return self._id

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        """Get last update timestamp."""
        return self._updated_at

    @property
    def version(self) -> int:
        """Get current version."""
        return self._version

    def touch(self) -> None:
        """Record a modification."""
        self._updated_at = datetime.now(timezone.utc)
        self._version += 1

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"


class Person(AbstractEntity):
    """Abstract base class for all persons in the system."""

    def __init__(self, first_name: str, last_name: str, person_type: PersonType, **kwargs):
        super().__init__(**kwargs)
        if not first_name or not last_name:
            raise ValidationError("First and last name are required")
        self._first_name = first_name
        self._last_name = last_name
        self._person_type = person_type

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def person_type(self) -> PersonType:
        return self._person_type

    @property
    def role(self) -> str:
        return self._person_type.value.capitalize()

    def __str__(self) -> str:
        return f"{self.full_name} ({self.role}, id={self._id})"


class Student(Person):
    """Student entity with a major and its enrollment history."""

    def __init__(self, first_name: str, last_name: str, major: str, **kwargs):
        super().__init__(first_name, last_name, PersonType.STUDENT, **kwargs)
        self._major = major
        self._enrollment_ids: List[str] = []

    @property
    def major(self) -> str:
        return self._major

    @property
    def enrollment_ids(self) -> List[str]:
        """Identifiers of every enrollment ever made, in enrollment order.

        Dropped enrollments stay in this list.
        """
        return list(self._enrollment_ids)

    def add_enrollment(self, enrollment_id: str) -> None:
        """Append an enrollment to the student's history."""
        self._enrollment_ids.append(enrollment_id)
        self.touch()


class Instructor(Person):
    """Instructor entity with a department."""

    def __init__(self, first_name: str, last_name: str, department: str, **kwargs):
        super().__init__(first_name, last_name, PersonType.INSTRUCTOR, **kwargs)
        self._department = department

    @property
    def department(self) -> str:
        return self._department


class Course(AbstractEntity):
    """Course entity with a fixed capacity and its current occupancy."""

    def __init__(self, code: str, title: str, capacity: int, **kwargs):
        super().__init__(**kwargs)
        if capacity < 1:
            raise ValidationError(
                "Capacity must be at least 1",
                details={'code': code, 'capacity': capacity}
            )
        self._code = code
        self._title = title
        self._capacity = capacity
        self._instructor: Optional[Instructor] = None
        self._enrollment_ids: List[str] = []

    @property
    def code(self) -> str:
        return self._code

    @property
    def title(self) -> str:
        return self._title

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def instructor(self) -> Optional[Instructor]:
        return self._instructor

    @property
    def enrollment_ids(self) -> List[str]:
        return list(self._enrollment_ids)

    @property
    def enrolled_count(self) -> int:
        return len(self._enrollment_ids)

    @property
    def is_full(self) -> bool:
        return len(self._enrollment_ids) >= self._capacity

    def set_instructor(self, instructor: Optional[Instructor]) -> None:
        """Assign (or clear) the course instructor."""
        self._instructor = instructor
        self.touch()

    def add_enrollment(self, enrollment_id: str) -> None:
        self._enrollment_ids.append(enrollment_id)
        self.touch()

    def remove_enrollment(self, enrollment_id: str) -> None:
        if enrollment_id in self._enrollment_ids:
            self._enrollment_ids.remove(enrollment_id)
            self.touch()

    def __str__(self) -> str:
        instructor = self._instructor.full_name if self._instructor else "-"
        return (f"{self._code} - {self._title} (cap: {self._capacity}, "
                f"enrolled: {self.enrolled_count}, instructor: {instructor})")


class Enrollment(AbstractEntity):
    """Record linking one student to one course.

    Status and grade are freely settable; no transition graph is enforced.
    Grades must be finite numbers.
    """

    def __init__(self, student: Student, course: Course, **kwargs):
        super().__init__(**kwargs)
        self._student = student
        self._course = course
        self._status = EnrollmentStatus.ENROLLED
        self._grade: Optional[float] = None

    @property
    def student(self) -> Student:
        return self._student

    @property
    def course(self) -> Course:
        return self._course

    @property
    def status(self) -> EnrollmentStatus:
        return self._status

    @status.setter
    def status(self, status: EnrollmentStatus) -> None:
        self._status = status
        self.touch()

    @property
    def grade(self) -> Optional[float]:
        return self._grade

    @grade.setter
    def grade(self, grade: Optional[float]) -> None:
        if grade is not None:
            grade = float(grade)
            if not math.isfinite(grade):
                raise ValidationError("Grade must be a finite number", details={'grade': grade})
        self._grade = grade
        self.touch()

    def __str__(self) -> str:
        grade = "-" if self._grade is None else self._grade
        return (f"Enrollment[id={self._id}, student={self._student.full_name}, "
                f"course={self._course.code}, status={self._status.name}, grade={grade}]")
