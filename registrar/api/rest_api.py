"""
REST API implementation for the Registrar platform using FastAPI.
"""

import threading
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone
from pydantic import BaseModel, Field

from fastapi import FastAPI, HTTPException, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.entities import Student, Instructor, Course, Enrollment
from ..core.enums import EnrollmentStatus
from ..core.exceptions import (
    ValidationError, DuplicateEntityError, CourseFullError, DuplicateEnrollmentError
)
from ..services import CourseRegistry, EnrollmentService, PeopleRegistry


# Pydantic models for API
class StudentCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    major: str = Field(..., min_length=1, max_length=100)


class StudentResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    full_name: str
    major: str
    enrollments: List[str] = []
    created_at: datetime
    updated_at: datetime
    version: int


class InstructorCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    department: str = Field(..., min_length=1, max_length=100)


class InstructorResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    full_name: str
    department: str


class CourseCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1, max_length=200)
    capacity: int


class CourseResponse(BaseModel):
    id: str
    code: str
    title: str
    capacity: int
    enrolled_count: int
    is_full: bool
    instructor_id: Optional[str] = None
    instructor_name: Optional[str] = None
    enrollments: List[str] = []
    display: str
    created_at: datetime
    updated_at: datetime
    version: int


class InstructorAssignment(BaseModel):
    instructor_id: Optional[str] = None


class EnrollmentRequest(BaseModel):
    student_id: str = Field(..., min_length=1)
    course_id: str = Field(..., min_length=1)


class EnrollmentUpdate(BaseModel):
    status: Optional[EnrollmentStatus] = None
    grade: Optional[float] = Field(None, allow_inf_nan=False)


class EnrollmentResponse(BaseModel):
    id: str
    student_id: str
    student_name: str
    course_id: str
    course_code: str
    status: str
    grade: Optional[float] = None
    display: str


class StatisticsResponse(BaseModel):
    success: bool
    message: str
    statistics: Dict[str, Any]


class RegistrarRestAPI:
    """REST API implementation for the Registrar platform."""

    def __init__(self, course_registry: CourseRegistry, enrollment_service: EnrollmentService,
                 people_registry: PeopleRegistry):
        self._course_registry = course_registry
        self._enrollment_service = enrollment_service
        self._people_registry = people_registry

        self._lock = threading.RLock()

        # Create FastAPI app
        self.app = FastAPI(
            title="Registrar API",
            description="Course enrollment administration",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc"
        )

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "Registrar API",
                "version": __version__,
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        # Student endpoints
        @self.app.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
        async def create_student(student_data: StudentCreate):
            """Create a new student."""
            try:
                with self._lock:
                    student = self._people_registry.register_student(
                        first_name=student_data.first_name,
                        last_name=student_data.last_name,
                        major=student_data.major
                    )
                    return self._student_to_response(student)

            except ValidationError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.get("/students", response_model=List[StudentResponse])
        async def list_students(skip: int = 0, limit: int = 100):
            """List all students."""
            with self._lock:
                students = self._people_registry.list_students()[skip:skip + limit]
                return [self._student_to_response(student) for student in students]

        @self.app.get("/students/{student_id}", response_model=StudentResponse)
        async def get_student(student_id: str):
            """Get a student by ID."""
            with self._lock:
                return self._student_to_response(self._require_student(student_id))

        @self.app.get("/students/{student_id}/enrollments", response_model=List[EnrollmentResponse])
        async def get_student_enrollments(student_id: str,
                                          enrollment_status: Optional[EnrollmentStatus] = Query(None, alias="status")):
            """Get a student's enrollment history, dropped enrollments included."""
            with self._lock:
                student = self._require_student(student_id)
                enrollments = self._enrollment_service.student_enrollments(student, enrollment_status)
                return [self._enrollment_to_response(e) for e in enrollments]

        # Instructor endpoints
        @self.app.post("/instructors", response_model=InstructorResponse, status_code=status.HTTP_201_CREATED)
        async def create_instructor(instructor_data: InstructorCreate):
            """Create a new instructor."""
            try:
                with self._lock:
                    instructor = self._people_registry.register_instructor(
                        first_name=instructor_data.first_name,
                        last_name=instructor_data.last_name,
                        department=instructor_data.department
                    )
                    return self._instructor_to_response(instructor)

            except ValidationError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.get("/instructors", response_model=List[InstructorResponse])
        async def list_instructors():
            """List all instructors."""
            with self._lock:
                return [self._instructor_to_response(i) for i in self._people_registry.list_instructors()]

        # Course endpoints
        @self.app.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
        async def create_course(course_data: CourseCreate):
            """Create a new course."""
            try:
                with self._lock:
                    course = self._course_registry.create_course(
                        course_data.code, course_data.title, course_data.capacity
                    )
                    return self._course_to_response(course)

            except ValidationError as e:
                raise HTTPException(status_code=400, detail=str(e))
            except DuplicateEntityError as e:
                raise HTTPException(status_code=409, detail=str(e))

        @self.app.get("/courses", response_model=List[CourseResponse])
        async def list_courses(sort: Optional[str] = None):
            """List all courses, optionally ordered by title."""
            with self._lock:
                if sort is None:
                    courses = self._course_registry.list_courses()
                elif sort == "title":
                    courses = self._course_registry.sort_by_title()
                else:
                    raise HTTPException(status_code=400, detail=f"Unsupported sort key: {sort}")
                return [self._course_to_response(course) for course in courses]

        @self.app.get("/courses/by-code/{code}", response_model=CourseResponse)
        async def get_course_by_code(code: str):
            """Get a course by code, ignoring case."""
            with self._lock:
                course = self._course_registry.get_course_by_code(code)
                if not course:
                    raise HTTPException(status_code=404, detail="Course not found")
                return self._course_to_response(course)

        @self.app.get("/courses/{course_id}", response_model=CourseResponse)
        async def get_course(course_id: str):
            """Get a course by ID."""
            with self._lock:
                return self._course_to_response(self._require_course(course_id))

        @self.app.delete("/courses/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
        async def delete_course(course_id: str):
            """Delete a course. Existing enrollments are not touched."""
            with self._lock:
                if not self._course_registry.delete_course(course_id):
                    raise HTTPException(status_code=404, detail="Course not found")
                return Response(status_code=status.HTTP_204_NO_CONTENT)

        @self.app.put("/courses/{course_id}/instructor", response_model=CourseResponse)
        async def assign_instructor(course_id: str, assignment: InstructorAssignment):
            """Assign or clear a course's instructor."""
            with self._lock:
                self._require_course(course_id)
                instructor = None
                if assignment.instructor_id is not None:
                    instructor = self._people_registry.get_instructor(assignment.instructor_id)
                    if not instructor:
                        raise HTTPException(status_code=404, detail="Instructor not found")
                course = self._course_registry.assign_instructor(course_id, instructor)
                return self._course_to_response(course)

        # Enrollment endpoints
        @self.app.post("/enrollments", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
        async def enroll_student(enrollment_data: EnrollmentRequest):
            """Enroll a student in a course."""
            try:
                with self._lock:
                    student = self._require_student(enrollment_data.student_id)
                    course = self._require_course(enrollment_data.course_id)

                    enrollment = self._enrollment_service.enroll(student, course)
                    return self._enrollment_to_response(enrollment)

            except (CourseFullError, DuplicateEnrollmentError) as e:
                raise HTTPException(
                    status_code=409,
                    detail={"error_code": e.error_code, "message": e.message}
                )

        @self.app.get("/enrollments", response_model=List[EnrollmentResponse])
        async def list_enrollments(enrollment_status: Optional[EnrollmentStatus] = Query(None, alias="status"),
                                   student_id: Optional[str] = None,
                                   course_id: Optional[str] = None):
            """List active enrollments, filtered by status, student or course."""
            with self._lock:
                if enrollment_status is not None:
                    enrollments = self._enrollment_service.find_by_status(enrollment_status)
                else:
                    enrollments = self._enrollment_service.list_enrollments()

                if student_id is not None:
                    student = self._require_student(student_id)
                    enrollments = [e for e in enrollments if e.student == student]
                if course_id is not None:
                    course = self._require_course(course_id)
                    enrollments = [e for e in enrollments if e.course == course]

                return [self._enrollment_to_response(e) for e in enrollments]

        @self.app.get("/enrollments/ranked", response_model=List[EnrollmentResponse])
        async def ranked_enrollments():
            """Graded enrollments ordered by grade, highest first."""
            with self._lock:
                return [self._enrollment_to_response(e) for e in self._enrollment_service.sort_by_grade_desc()]

        @self.app.patch("/enrollments/{enrollment_id}", response_model=EnrollmentResponse)
        async def update_enrollment(enrollment_id: str, update: EnrollmentUpdate):
            """Set an enrollment's status and/or grade."""
            try:
                with self._lock:
                    enrollment = self._require_enrollment(enrollment_id)
                    if "grade" in update.model_fields_set:
                        self._enrollment_service.set_grade(enrollment, update.grade)
                    if update.status is not None:
                        self._enrollment_service.set_status(enrollment, update.status)
                    return self._enrollment_to_response(enrollment)

            except ValidationError as e:
                raise HTTPException(status_code=400, detail=str(e))

        @self.app.delete("/enrollments/{enrollment_id}", response_model=EnrollmentResponse)
        async def drop_enrollment(enrollment_id: str):
            """Drop an active enrollment."""
            with self._lock:
                enrollment = self._require_enrollment(enrollment_id)
                self._enrollment_service.drop(enrollment)
                return self._enrollment_to_response(enrollment)

        # Statistics endpoints
        @self.app.get("/statistics", response_model=StatisticsResponse)
        async def get_statistics():
            """Get system statistics."""
            with self._lock:
                statistics = {
                    "courses": len(self._course_registry),
                    "students": len(self._people_registry.list_students()),
                    "instructors": len(self._people_registry.list_instructors()),
                    "enrollment": self._enrollment_service.get_statistics(),
                }

                return StatisticsResponse(
                    success=True,
                    message="Statistics retrieved successfully",
                    statistics=statistics
                )

    def _require_student(self, student_id: str) -> Student:
        student = self._people_registry.get_student(student_id)
        if not student:
            raise HTTPException(status_code=404, detail="Student not found")
        return student

    def _require_course(self, course_id: str) -> Course:
        course = self._course_registry.get_course_by_id(course_id)
        if not course:
            raise HTTPException(status_code=404, detail="Course not found")
        return course

    def _require_enrollment(self, enrollment_id: str) -> Enrollment:
        enrollment = self._enrollment_service.get_enrollment(enrollment_id)
        if not enrollment:
            raise HTTPException(status_code=404, detail="Enrollment not found")
        return enrollment

    def _student_to_response(self, student: Student) -> StudentResponse:
        """Convert Student entity to response model."""
        return StudentResponse(
            id=student.id,
            first_name=student.first_name,
            last_name=student.last_name,
            full_name=student.full_name,
            major=student.major,
            enrollments=student.enrollment_ids,
            created_at=student.created_at,
            updated_at=student.updated_at,
            version=student.version
        )

    def _instructor_to_response(self, instructor: Instructor) -> InstructorResponse:
        """Convert Instructor entity to response model."""
        return InstructorResponse(
            id=instructor.id,
            first_name=instructor.first_name,
            last_name=instructor.last_name,
            full_name=instructor.full_name,
            department=instructor.department
        )

    def _course_to_response(self, course: Course) -> CourseResponse:
        """Convert Course entity to response model."""
        instructor = course.instructor
        return CourseResponse(
            id=course.id,
            code=course.code,
            title=course.title,
            capacity=course.capacity,
            enrolled_count=course.enrolled_count,
            is_full=course.is_full,
            instructor_id=instructor.id if instructor else None,
            instructor_name=instructor.full_name if instructor else None,
            enrollments=course.enrollment_ids,
            display=str(course),
            created_at=course.created_at,
            updated_at=course.updated_at,
            version=course.version
        )

    def _enrollment_to_response(self, enrollment: Enrollment) -> EnrollmentResponse:
        """Convert Enrollment entity to response model."""
        return EnrollmentResponse(
            id=enrollment.id,
            student_id=enrollment.student.id,
            student_name=enrollment.student.full_name,
            course_id=enrollment.course.id,
            course_code=enrollment.course.code,
            status=enrollment.status.value,
            grade=enrollment.grade,
            display=str(enrollment)
        )
