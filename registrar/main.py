"""
Main entry point for the Registrar platform.
"""

import json
import logging
from typing import Optional

from .core.entities import Student, Instructor
from .core.enums import EnrollmentStatus
from .core.exceptions import EnrollmentError
from .services import CourseRegistry, EnrollmentService, PeopleRegistry
from .api.rest_api import RegistrarRestAPI

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'log_level': 'WARNING',
    'unique_course_codes': False,
    'host': '127.0.0.1',
    'port': 8000,
}


class RegistrarPlatform:
    """Main platform class that wires the registries, the engine and the API."""

    def __init__(self, config: Optional[dict] = None):
        self._config = dict(DEFAULT_CONFIG)
        self._config.update(config or {})

        self._course_registry = CourseRegistry(
            unique_codes=bool(self._config['unique_course_codes'])
        )
        self._enrollment_service = EnrollmentService()
        self._people_registry = PeopleRegistry()
        self._rest_api = RegistrarRestAPI(
            self._course_registry,
            self._enrollment_service,
            self._people_registry
        )
        logger.debug("Platform initialized with config %s", self._config)

    @property
    def config(self) -> dict:
        return dict(self._config)

    @property
    def courses(self) -> CourseRegistry:
        return self._course_registry

    @property
    def enrollments(self) -> EnrollmentService:
        return self._enrollment_service

    @property
    def people(self) -> PeopleRegistry:
        return self._people_registry

    @property
    def app(self):
        """The FastAPI application."""
        return self._rest_api.app

    def serve(self, host: Optional[str] = None, port: Optional[int] = None):
        """Run the REST server until interrupted."""
        import uvicorn

        host = host or self._config['host']
        port = port or self._config['port']
        logger.info("Starting REST server on %s:%s", host, port)
        uvicorn.run(
            self.app,
            host=host,
            port=port,
            log_level=str(self._config['log_level']).lower()
        )

    def run_demo(self):
        """Run the enrollment demonstration, printing every step."""
        cm = self._course_registry
        em = self._enrollment_service

        prof_ivan = self._people_registry.add(Instructor("Ivan", "Petrov", "Computer Science"))
        prof_anna = self._people_registry.add(Instructor("Anna", "Smirnova", "Mathematics"))

        oop = cm.create_course("OOP101", "Object-Oriented Programming", 3)
        alg = cm.create_course("ALG201", "Algorithms", 2)

        oop.set_instructor(prof_ivan)
        alg.set_instructor(prof_anna)

        s1 = self._people_registry.add(Student("Ainur", "K", "CS"))
        s2 = self._people_registry.add(Student("Dana", "S", "CS"))
        s3 = self._people_registry.add(Student("Erlan", "T", "Math"))

        person = s1
        print(f"Polymorphism check: {person.full_name} -> {person.role}")

        try:
            em.enroll(s1, oop)
            em.enroll(s2, oop)
            em.enroll(s3, oop)

            em.enroll(s1, alg)
            em.enroll(s2, alg)
        except EnrollmentError as e:
            print(f"Enrollment failed: {e}")

        try:
            em.enroll(s3, alg)
        except EnrollmentError as e:
            print(f"Enrollment failed: {e}")

        print("\nCourses:")
        for course in cm.list_courses():
            print(f"  {course}")
            for enrollment in em.course_enrollments(course):
                print(f"     -> {enrollment.student.full_name} ({enrollment.status.name})")

        print("\nStudent schedules:")
        for student in (s1, s2, s3):
            print(f"  {student} major={student.major}")
            for enrollment in em.student_enrollments(student):
                print(f"     - {enrollment.course.code} : {enrollment.status.name}")

        e1 = em.student_enrollments(s1)[0]
        e1.grade = 92.0
        e1.status = EnrollmentStatus.COMPLETED

        e2 = em.student_enrollments(s2)[0]
        e2.grade = 42.0
        e2.status = EnrollmentStatus.DROPPED

        e3 = em.student_enrollments(s3)[0]
        e3.grade = 69.0
        e3.status = EnrollmentStatus.ENROLLED

        print("\nAfter grading:")
        print(e1)
        print(e2)
        print(e3)

        print("\nCompleted enrollments:")
        for enrollment in em.find_by_status(EnrollmentStatus.COMPLETED):
            print(enrollment)

        print("\nEnrollments sorted by grade (desc):")
        for enrollment in em.sort_by_grade_desc():
            print(enrollment)

        print("\nCourses sorted by title:")
        for course in cm.sort_by_title():
            print(course)


def main(argv=None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Registrar course enrollment platform")
    parser.add_argument("--host", type=str, help="REST server host")
    parser.add_argument("--port", type=int, help="REST server port")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")
    parser.add_argument("--config", type=str, help="Configuration file path")
    parser.add_argument("--log-level", type=str, help="Logging level (DEBUG, INFO, WARNING, ...)")

    args = parser.parse_args(argv)

    # Load configuration
    config = {}
    if args.config:
        with open(args.config, 'r') as f:
            config = json.load(f)
    if args.log_level:
        config['log_level'] = args.log_level

    logging.basicConfig(
        level=str(config.get('log_level', DEFAULT_CONFIG['log_level'])).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    platform = RegistrarPlatform(config)

    if args.demo:
        platform.run_demo()
        return

    try:
        platform.serve(args.host, args.port)
    except KeyboardInterrupt:
        print("\nShutting down...")


if __name__ == "__main__":
    main()
