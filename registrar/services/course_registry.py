"""
Course registry: owns the set of courses.
"""

import logging
import threading
from typing import Dict, List, Optional

from ..core.entities import Course, Instructor
from ..core.exceptions import DuplicateEntityError, ResourceNotFoundError

logger = logging.getLogger(__name__)


class CourseRegistry:
    """Registry of courses keyed by identifier, in creation order."""

    def __init__(self, unique_codes: bool = False):
        self._courses: Dict[str, Course] = {}
        self._unique_codes = unique_codes
        self._lock = threading.RLock()

    def create_course(self, code: str, title: str, capacity: int) -> Course:
        """Create and register a new course with no instructor and no enrollments."""
        with self._lock:
            if self._unique_codes and self.get_course_by_code(code) is not None:
                raise DuplicateEntityError(
                    f"Course code {code} is already registered",
                    error_code="duplicate_course_code",
                    details={'code': code}
                )

            course = Course(code, title, capacity)
            self._courses[course.id] = course
            logger.info("Created course %s (%s), capacity %d", code, course.id, capacity)
            return course

    def get_course_by_id(self, course_id: str) -> Optional[Course]:
        with self._lock:
            return self._courses.get(course_id)

    def get_course_by_code(self, code: str) -> Optional[Course]:
        """Find a course by code, ignoring case. The first registered match wins."""
        wanted = code.casefold()
        with self._lock:
            for course in self._courses.values():
                if course.code.casefold() == wanted:
                    return course
        logger.debug("No course with code %s", code)
        return None

    def list_courses(self) -> List[Course]:
        with self._lock:
            return list(self._courses.values())

    def sort_by_title(self) -> List[Course]:
        """All courses ordered by title; ties keep registration order."""
        with self._lock:
            return sorted(self._courses.values(), key=lambda course: course.title)

    def delete_course(self, course_id: str) -> bool:
        """Remove a course.

        Enrollments that reference the course are left untouched and keep
        pointing at it.
        """
        with self._lock:
            course = self._courses.pop(course_id, None)
        if course is None:
            return False
        logger.info("Deleted course %s (%s)", course.code, course_id)
        return True

    def assign_instructor(self, course_id: str, instructor: Optional[Instructor]) -> Course:
        with self._lock:
            course = self._courses.get(course_id)
            if course is None:
                raise ResourceNotFoundError(f"Course {course_id} not found")
            course.set_instructor(instructor)
            return course

    def __len__(self) -> int:
        return len(self._courses)

    def __contains__(self, course_id: object) -> bool:
        return course_id in self._courses
