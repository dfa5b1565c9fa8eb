"""Tests for the platform wiring and the demonstration scenario."""

import json

import pytest

from registrar.core.exceptions import DuplicateEntityError
from registrar.main import RegistrarPlatform, main


class TestRegistrarPlatform:
    """Tests for RegistrarPlatform."""

    def test_default_config(self) -> None:
        platform = RegistrarPlatform()

        assert platform.config["unique_course_codes"] is False
        assert platform.config["port"] == 8000

    def test_unique_course_codes_config(self) -> None:
        platform = RegistrarPlatform({"unique_course_codes": True})
        platform.courses.create_course("OOP101", "OOP", 3)

        with pytest.raises(DuplicateEntityError) as exc_info:
            platform.courses.create_course("OOP101", "Again", 3)

        assert exc_info.value.error_code == "duplicate_course_code"


class TestDemo:
    """Tests for the demonstration scenario output."""

    def test_demo_output(self, capsys) -> None:
        platform = RegistrarPlatform()

        platform.run_demo()
        out = capsys.readouterr().out

        assert "Polymorphism check: Ainur K -> Student" in out
        assert "Enrollment failed: Course ALG201 is full" in out
        assert "OOP101 - Object-Oriented Programming (cap: 3, enrolled: 3, instructor: Ivan Petrov)" in out
        assert "ALG201 - Algorithms (cap: 2, enrolled: 2, instructor: Anna Smirnova)" in out
        assert "     -> Dana S (ENROLLED)" in out
        assert "     - ALG201 : ENROLLED" in out

    def test_demo_grade_ranking(self, capsys) -> None:
        platform = RegistrarPlatform()

        platform.run_demo()
        out = capsys.readouterr().out

        ranked = out.split("Enrollments sorted by grade (desc):\n")[1].split("\n\n")[0].splitlines()
        assert [line.split("student=")[1].split(",")[0] for line in ranked] == [
            "Ainur K", "Erlan T", "Dana S"
        ]
        assert ranked[0].endswith("status=COMPLETED, grade=92.0]")

        by_title = out.split("Courses sorted by title:\n")[1].splitlines()
        assert by_title[0].startswith("ALG201 - Algorithms")
        assert by_title[1].startswith("OOP101 - Object-Oriented Programming")

    def test_completed_listing(self, capsys) -> None:
        platform = RegistrarPlatform()

        platform.run_demo()
        out = capsys.readouterr().out

        completed = out.split("Completed enrollments:\n")[1].split("\n\n")[0].splitlines()
        assert len(completed) == 1
        assert "student=Ainur K, course=OOP101, status=COMPLETED" in completed[0]


class TestCli:
    """Tests for the command line entry point."""

    def test_demo_flag(self, capsys) -> None:
        main(["--demo"])

        assert "Courses sorted by title:" in capsys.readouterr().out

    def test_config_file(self, tmp_path, capsys) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"log_level": "ERROR"}))

        main(["--demo", "--config", str(config_path)])

        assert "Polymorphism check" in capsys.readouterr().out
