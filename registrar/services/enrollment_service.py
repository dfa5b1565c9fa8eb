"""
Enrollment service: creates, drops and queries enrollments.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from ..core.entities import Course, Enrollment, Student
from ..core.enums import EnrollmentStatus
from ..core.exceptions import CourseFullError, DuplicateEnrollmentError

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Owns every enrollment and enforces capacity and duplicate rules.

    ``_records`` holds every enrollment ever created so student histories can
    be resolved after a drop. ``_registered`` holds the active ones; all
    queries except the history lookups read from it.
    """

    def __init__(self):
        self._records: Dict[str, Enrollment] = {}
        self._registered: Dict[str, Enrollment] = {}
        self._lock = threading.RLock()

    def enroll(self, student: Student, course: Course) -> Enrollment:
        """Enroll a student in a course.

        Raises:
            CourseFullError: the course has reached its capacity.
            DuplicateEnrollmentError: the student already holds an active
                enrollment in this course, whatever its status.
        """
        with self._lock:
            if course.is_full:
                logger.warning("Rejected %s for %s: course full", student.full_name, course.code)
                raise CourseFullError(course.code, course.capacity)

            if self._is_enrolled(student, course):
                logger.warning("Rejected %s for %s: already enrolled", student.full_name, course.code)
                raise DuplicateEnrollmentError(student.full_name, course.code)

            enrollment = Enrollment(student, course)
            self._records[enrollment.id] = enrollment
            self._registered[enrollment.id] = enrollment
            course.add_enrollment(enrollment.id)
            student.add_enrollment(enrollment.id)

            logger.info("Enrolled %s in %s (%s)", student.full_name, course.code, enrollment.id)
            return enrollment

    def drop(self, enrollment: Enrollment) -> bool:
        """Drop an active enrollment.

        The enrollment leaves the course and the active set but stays in the
        student's history. Returns False, changing nothing, if the enrollment
        is not currently registered.
        """
        with self._lock:
            if enrollment.id not in self._registered:
                logger.debug("Drop ignored, %s is not registered", enrollment.id)
                return False

            enrollment.status = EnrollmentStatus.DROPPED
            enrollment.course.remove_enrollment(enrollment.id)
            del self._registered[enrollment.id]

            logger.info("Dropped %s from %s (%s)",
                        enrollment.student.full_name, enrollment.course.code, enrollment.id)
            return True

    def get_enrollment(self, enrollment_id: str) -> Optional[Enrollment]:
        with self._lock:
            return self._registered.get(enrollment_id)

    def list_enrollments(self) -> List[Enrollment]:
        with self._lock:
            return list(self._registered.values())

    def find_by_student(self, student: Student) -> List[Enrollment]:
        with self._lock:
            return [e for e in self._registered.values() if e.student == student]

    def find_by_course(self, course: Course) -> List[Enrollment]:
        with self._lock:
            return [e for e in self._registered.values() if e.course == course]

    def find_by_status(self, status: EnrollmentStatus) -> List[Enrollment]:
        with self._lock:
            return [e for e in self._registered.values() if e.status == status]

    def sort_by_grade_desc(self) -> List[Enrollment]:
        """Graded active enrollments, highest grade first.

        Ungraded enrollments are left out. Equal grades keep enrollment order.
        """
        with self._lock:
            graded = [e for e in self._registered.values() if e.grade is not None]
        return sorted(graded, key=lambda e: e.grade, reverse=True)

    def student_enrollments(self, student: Student,
                            status: Optional[EnrollmentStatus] = None) -> List[Enrollment]:
        """Resolve a student's enrollment history, including dropped ones."""
        with self._lock:
            history = [self._records[eid] for eid in student.enrollment_ids if eid in self._records]
        if status is None:
            return history
        return [e for e in history if e.status == status]

    def course_enrollments(self, course: Course) -> List[Enrollment]:
        """Resolve a course's current occupancy in enrollment order."""
        with self._lock:
            return [self._registered[eid] for eid in course.enrollment_ids if eid in self._registered]

    def set_grade(self, enrollment: Enrollment, grade: Optional[float]) -> Enrollment:
        with self._lock:
            enrollment.grade = grade
        logger.info("Graded %s: %s", enrollment.id, grade)
        return enrollment

    def set_status(self, enrollment: Enrollment, status: EnrollmentStatus) -> Enrollment:
        with self._lock:
            enrollment.status = status
        logger.info("Status of %s set to %s", enrollment.id, status.name)
        return enrollment

    def _is_enrolled(self, student: Student, course: Course) -> bool:
        """Check whether an active enrollment links this student and course."""
        return any(e.student == student and e.course == course
                   for e in self._registered.values())

    def get_statistics(self) -> Dict[str, Any]:
        """Get enrollment statistics."""
        with self._lock:
            by_status = {status.value: 0 for status in EnrollmentStatus}
            for enrollment in self._registered.values():
                by_status[enrollment.status.value] += 1

            return {
                'active_enrollments': len(self._registered),
                'total_enrollments': len(self._records),
                'graded_enrollments': sum(1 for e in self._registered.values() if e.grade is not None),
                'by_status': by_status,
            }
