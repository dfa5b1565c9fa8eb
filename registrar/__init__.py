"""
Registrar: course enrollment administration.

Tracks students, instructors and courses, and enforces the capacity and
duplicate-enrollment rules that govern the enrollments linking them.
"""

__version__ = "1.0.0"
__author__ = "Registrar Development Team"
__description__ = "Course enrollment integrity and query engine"
