
"""
Script to add sample data to the Registrar platform via REST API.
Make sure the server is running before executing this script.

Usage:
    python add_data.py
"""

import requests
import json
import sys
import os


def _console_supports_utf8() -> bool:
    enc = getattr(sys.stdout, "encoding", None)
    return enc is not None and "utf" in enc.lower()


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"
_WARN_CHAR = "⚠" if _console_supports_utf8() else "[WARN]"


def _detect_base_url() -> str:
    """Determine a reachable BASE_URL.

    Priority: environment variable `REGISTRAR_BASE_URL`, then common local ports.
    If nothing responds, fall back to http://127.0.0.1:8000.
    """
    env = os.environ.get("REGISTRAR_BASE_URL")
    if env:
        return env

    candidates = [
        "http://127.0.0.1:8000",
        "http://127.0.0.1:8888",
        "http://localhost:8000",
        "http://localhost:8888",
    ]

    for c in candidates:
        try:
            resp = requests.get(f"{c}/health", timeout=0.5)
            if resp.status_code == 200:
                return c
        except requests.exceptions.RequestException:
            continue

    return candidates[0]


BASE_URL = _detect_base_url()


def check_server():
    """Check if the server is running."""
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=2)
        if response.status_code == 200:
            print(f"{_OK_CHAR} Server is running")
            return True
    except requests.exceptions.RequestException:
        pass
    print(f"{_FAIL_CHAR} Server is not running!")
    print("\nPlease start the server first:")
    print("  python -m registrar.main --port 8000")
    return False


def _post(path, data, what):
    """POST a JSON body; return the decoded reply on 201, otherwise None."""
    try:
        response = requests.post(f"{BASE_URL}{path}", json=data, timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error creating {what}: {e}")
        return None
    if response.status_code == 201:
        return response.json()
    print(f"{_FAIL_CHAR} Failed to create {what}: {response.text}")
    return None


def create_student(first_name, last_name, major):
    """Create a new student."""
    student = _post("/students", {
        "first_name": first_name,
        "last_name": last_name,
        "major": major
    }, "student")
    if student:
        print(f"{_OK_CHAR} Created student: {student['full_name']} ({major})")
    return student


def create_instructor(first_name, last_name, department):
    """Create a new instructor."""
    instructor = _post("/instructors", {
        "first_name": first_name,
        "last_name": last_name,
        "department": department
    }, "instructor")
    if instructor:
        print(f"{_OK_CHAR} Created instructor: {instructor['full_name']} ({department})")
    return instructor


def create_course(code, title, capacity, instructor=None):
    """Create a new course, optionally assigning its instructor."""
    course = _post("/courses", {
        "code": code,
        "title": title,
        "capacity": capacity
    }, "course")
    if not course:
        return None
    print(f"{_OK_CHAR} Created course: {code} - {title}")

    if instructor:
        try:
            response = requests.put(
                f"{BASE_URL}/courses/{course['id']}/instructor",
                json={"instructor_id": instructor['id']},
                timeout=5
            )
        except requests.exceptions.RequestException as e:
            print(f"{_FAIL_CHAR} Error assigning instructor: {e}")
            return course
        if response.status_code == 200:
            course = response.json()
        else:
            print(f"{_FAIL_CHAR} Failed to assign instructor: {response.text}")
    return course


def enroll_student(student, course):
    """Enroll a student in a course."""
    try:
        response = requests.post(f"{BASE_URL}/enrollments", json={
            "student_id": student['id'],
            "course_id": course['id']
        }, timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error enrolling student: {e}")
        return None

    if response.status_code == 201:
        print(f"{_OK_CHAR} Enrolled {student['full_name']} in {course['code']}")
        return response.json()
    if response.status_code == 409:
        detail = response.json().get('detail', {})
        print(f"{_WARN_CHAR} {detail.get('message', 'Enrollment rejected')}")
        return None
    print(f"{_FAIL_CHAR} Failed to enroll student: {response.text}")
    return None


def grade_enrollment(enrollment, grade, status=None):
    """Set an enrollment's grade and optionally its status."""
    data = {"grade": grade}
    if status:
        data["status"] = status
    try:
        response = requests.patch(f"{BASE_URL}/enrollments/{enrollment['id']}", json=data, timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error grading enrollment: {e}")
        return None
    if response.status_code == 200:
        print(f"{_OK_CHAR} Graded {enrollment['student_name']} in {enrollment['course_code']}: {grade}")
        return response.json()
    print(f"{_FAIL_CHAR} Failed to grade enrollment: {response.text}")
    return None


def list_courses():
    """List all courses ordered by title."""
    try:
        response = requests.get(f"{BASE_URL}/courses", params={"sort": "title"}, timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error listing courses: {e}")
        return []
    if response.status_code != 200:
        print(f"{_FAIL_CHAR} Failed to list courses: {response.text}")
        return []
    courses = response.json()
    print(f"\n{'='*60}")
    print(f"Courses ({len(courses)})")
    print(f"{'='*60}")
    for course in courses:
        print(f"  {course['display']}")
    return courses


def list_ranked_enrollments():
    """List graded enrollments, best first."""
    try:
        response = requests.get(f"{BASE_URL}/enrollments/ranked", timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error listing enrollments: {e}")
        return []
    if response.status_code != 200:
        print(f"{_FAIL_CHAR} Failed to list enrollments: {response.text}")
        return []
    enrollments = response.json()
    print(f"\n{'='*60}")
    print("Enrollments by grade")
    print(f"{'='*60}")
    for enrollment in enrollments:
        print(f"  {enrollment['display']}")
    return enrollments


def get_statistics():
    """Get system statistics."""
    try:
        response = requests.get(f"{BASE_URL}/statistics", timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error getting statistics: {e}")
        return None
    if response.status_code != 200:
        print(f"{_FAIL_CHAR} Failed to get statistics: {response.text}")
        return None
    stats = response.json()
    print(f"\n{'='*60}")
    print("System Statistics")
    print(f"{'='*60}")
    print(json.dumps(stats['statistics'], indent=2))
    return stats


def main():
    """Main execution."""
    print("="*60)
    print("Registrar Platform - Data Addition Script")
    print("="*60)
    print()

    if not check_server():
        sys.exit(1)

    print("\n" + "="*60)
    print("Adding Sample Data...")
    print("="*60 + "\n")

    print("Creating instructors...")
    ivan = create_instructor("Ivan", "Petrov", "Computer Science")
    anna = create_instructor("Anna", "Smirnova", "Mathematics")

    print("\nCreating courses...")
    oop = create_course("OOP101", "Object-Oriented Programming", 3, ivan)
    alg = create_course("ALG201", "Algorithms", 2, anna)
    calc = create_course("MATH101", "Calculus I", 30, anna)

    print("\nCreating students...")
    students = [
        create_student("Ainur", "K", "CS"),
        create_student("Dana", "S", "CS"),
        create_student("Erlan", "T", "Math"),
        create_student("Madina", "B", "Math"),
    ]
    if not all(students) or not all((oop, alg, calc)):
        print(f"{_FAIL_CHAR} Could not create the sample entities")
        sys.exit(1)

    print("\nEnrolling students...")
    enrollments = [enroll_student(student, oop) for student in students]
    enroll_student(students[0], alg)
    enroll_student(students[1], alg)
    enroll_student(students[2], alg)
    enroll_student(students[0], calc)
    enroll_student(students[0], calc)

    print("\nGrading...")
    if enrollments[0]:
        grade_enrollment(enrollments[0], 92.0, "completed")
    if enrollments[2]:
        grade_enrollment(enrollments[2], 69.0)

    list_courses()
    list_ranked_enrollments()
    get_statistics()

    print("\n" + "="*60)
    print(f"{_OK_CHAR} Sample data added successfully!")
    print("="*60)
    print("\nYou can now:")
    print(f"  - View API docs: {BASE_URL}/docs")
    print(f"  - List courses: curl {BASE_URL}/courses?sort=title")
    print(f"  - Completed enrollments: curl '{BASE_URL}/enrollments?status=completed'")
    print(f"  - Get statistics: curl {BASE_URL}/statistics")
    print()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n\n{_FAIL_CHAR} Interrupted by user")
        sys.exit(1)
