# /tests/test_student_service.py

import pytest
from unittest.mock import MagicMock

from lab_allocation.models.student_model import Section, StudentCreate, StudentUpdate
from lab_allocation.services import student_service

# --- Test Data Fixtures ---

@pytest.fixture
def mock_db_service():
    """Provides a mock of the DatabaseService for dependency injection."""
    return MagicMock()

@pytest.fixture
def all_students():
    """Students as returned by get_students_with_computers, in store order."""
    return [
        {"id": "stu_1", "name": "Asha", "studentId": "R01", "section": "A", "computer_id": "cmp_1", "computer_name": "Computer 1"},
        {"id": "stu_2", "name": "Bilal", "studentId": "R02", "section": "B", "computer_id": "cmp_1", "computer_name": "Computer 1"},
        {"id": "stu_3", "name": "Chen", "studentId": "R03", "section": "A", "computer_id": "cmp_2", "computer_name": "Computer 2"},
        {"id": "stu_4", "name": "Divya", "studentId": "R04", "section": "A", "computer_id": "cmp_1", "computer_name": "Computer 1"},
        {"id": "stu_5", "name": "Emre", "studentId": "R05", "section": "A", "computer_id": None, "computer_name": None},
    ]


# --- Allocation roster builder ---

def test_roster_keeps_only_students_matching_computer_and_section(all_students):
    roster = student_service.build_allocation_roster(all_students, "cmp_1", "A")

    assert [s["id"] for s in roster] == ["stu_1", "stu_4"]
    assert [s["position"] for s in roster] == [1, 2]
    assert all(s["computer_id"] == "cmp_1" and s["section"] == "A" for s in roster)


def test_roster_accepts_section_enum(all_students):
    roster = student_service.build_allocation_roster(all_students, "cmp_1", Section.B)
    assert [s["id"] for s in roster] == ["stu_2"]


def test_roster_with_no_match_is_empty_not_an_error(all_students):
    assert student_service.build_allocation_roster(all_students, "cmp_2", "C") == []
    assert student_service.build_allocation_roster([], "cmp_1", "A") == []


def test_roster_does_not_mutate_input(all_students):
    student_service.build_allocation_roster(all_students, "cmp_1", "A")
    assert "position" not in all_students[0]


def test_get_roster_returns_none_for_unknown_computer(mock_db_service):
    mock_db_service.get_computer_by_id.return_value = None
    assert student_service.get_roster("cmp_missing", Section.A, mock_db_service) is None
    mock_db_service.get_students_with_computers.assert_not_called()


def test_export_roster_as_csv_has_header_and_rows(mock_db_service, all_students):
    computer = MagicMock(id="cmp_1")
    computer.name = "Computer 1"
    mock_db_service.get_computer_by_id.return_value = computer
    mock_db_service.get_students_with_computers.return_value = all_students

    csv_text = student_service.export_roster_as_csv("cmp_1", Section.A, mock_db_service)
    lines = csv_text.strip().splitlines()

    assert lines[0] == "#,Student Name,Roll Number,Section,Computer"
    assert lines[1] == "1,Asha,R01,A,Computer 1"
    assert lines[2] == "2,Divya,R04,A,Computer 1"


def test_export_roster_for_empty_section_has_header_only(mock_db_service):
    computer = MagicMock(id="cmp_1")
    computer.name = "Computer 1"
    mock_db_service.get_computer_by_id.return_value = computer
    mock_db_service.get_students_with_computers.return_value = []

    csv_text = student_service.export_roster_as_csv("cmp_1", Section.C, mock_db_service)
    assert csv_text.strip() == "#,Student Name,Roll Number,Section,Computer"


# --- Student listing and editing ---

def test_get_all_students_filters(mock_db_service, all_students):
    mock_db_service.get_students_with_computers.return_value = all_students

    section_a = student_service.get_all_students(mock_db_service, section=Section.A)
    assert {s["id"] for s in section_a} == {"stu_1", "stu_3", "stu_4", "stu_5"}

    unallocated = student_service.get_all_students(mock_db_service, unallocated_only=True)
    assert [s["id"] for s in unallocated] == ["stu_5"]


def test_update_student_with_empty_section_is_rejected_without_store_call(mock_db_service):
    # Bypass pydantic validation to reach the service-level guard.
    bad_update = StudentUpdate.model_construct(name="Asha", studentId="R01", section="")

    with pytest.raises(ValueError, match="All fields are required"):
        student_service.update_student("stu_1", bad_update, mock_db_service)
    mock_db_service.update_student.assert_not_called()


def test_update_student_trims_and_passes_plain_values(mock_db_service):
    updated = MagicMock()
    updated.to_dict.return_value = {"id": "stu_1", "name": "Asha K", "studentId": "R01", "section": "C"}
    mock_db_service.update_student.return_value = updated

    result = student_service.update_student(
        "stu_1", StudentUpdate(name="  Asha K ", studentId="R01", section="C"), mock_db_service
    )

    mock_db_service.update_student.assert_called_once_with(
        "stu_1", {"name": "Asha K", "studentId": "R01", "section": "C"}
    )
    assert result["section"] == "C"


def test_update_unknown_student_returns_none(mock_db_service):
    mock_db_service.update_student.return_value = None
    update = StudentUpdate(name="X", studentId="R9", section="A")
    assert student_service.update_student("stu_missing", update, mock_db_service) is None


# --- Student creation ---

def test_create_student_trims_and_normalises_section(mock_db_service):
    created = MagicMock(id="stu_new", section="B")
    created.to_dict.return_value = {"id": "stu_new", "name": "Asha", "studentId": "R01", "section": "B"}
    mock_db_service.add_student.return_value = created

    result = student_service.create_student(
        StudentCreate(name="  Asha ", studentId=" R01", section=" b "), mock_db_service
    )

    record = mock_db_service.add_student.call_args.args[0]
    assert record["id"].startswith("stu_")
    assert {k: record[k] for k in ("name", "studentId", "section")} == {"name": "Asha", "studentId": "R01", "section": "B"}
    assert result["id"] == "stu_new"


@pytest.mark.parametrize("fields", [
    {"name": "   ", "studentId": "R01", "section": "A"},
    {"name": "Asha", "studentId": "", "section": "A"},
    {"name": "Asha", "studentId": "R01", "section": " "},
])
def test_create_student_with_blank_field_is_rejected_without_store_call(mock_db_service, fields):
    with pytest.raises(ValueError, match="All fields are required"):
        student_service.create_student(StudentCreate(**fields), mock_db_service)
    mock_db_service.add_student.assert_not_called()


def test_create_student_with_unknown_section_is_rejected(mock_db_service):
    with pytest.raises(ValueError, match="Section must be one of A, B, C"):
        student_service.create_student(StudentCreate(name="Asha", studentId="R01", section="D"), mock_db_service)
    mock_db_service.add_student.assert_not_called()
