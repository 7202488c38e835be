# /tests/test_allocation_service.py

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from lab_allocation.models.allocation_model import AllocateStudentsRequest, StudentSlot
from lab_allocation.services import allocation_service

# --- Test Data Fixtures ---

@pytest.fixture
def mock_db_service():
    return MagicMock()

@pytest.fixture
def computer(db_service):
    return db_service.add_computer({"id": "cmp_lab1", "name": "Computer 1", "location": "Row A"})

def _slot(name="", roll="", section=""):
    return StudentSlot(name=name, studentId=roll, section=section)


# --- Validation happens before any store call ---

def test_both_slots_empty_is_rejected_without_any_call(mock_db_service):
    request = AllocateStudentsRequest(computer_id="cmp_lab1", student1=_slot(), student2=_slot())

    with pytest.raises(ValueError, match="Please enter at least one student"):
        allocation_service.allocate_students(request, mock_db_service)
    assert mock_db_service.method_calls == []


def test_missing_computer_selection_is_rejected(mock_db_service):
    request = AllocateStudentsRequest(computer_id="  ", student1=_slot("Asha", "R01", "A"))

    with pytest.raises(ValueError, match="Please select a computer"):
        allocation_service.allocate_students(request, mock_db_service)
    assert mock_db_service.method_calls == []


def test_partially_filled_slot_counts_as_empty(mock_db_service):
    request = AllocateStudentsRequest(
        computer_id="cmp_lab1", student1=_slot("Asha", "R01", ""), student2=_slot("", "R02", "B")
    )
    with pytest.raises(ValueError, match="Please enter at least one student"):
        allocation_service.allocate_students(request, mock_db_service)
    assert mock_db_service.method_calls == []


def test_unknown_section_is_rejected(mock_db_service):
    request = AllocateStudentsRequest(computer_id="cmp_lab1", student1=_slot("Asha", "R01", "D"))
    with pytest.raises(ValueError, match="Section must be one of"):
        allocation_service.allocate_students(request, mock_db_service)
    assert mock_db_service.method_calls == []


# --- Behaviour against a real database ---

def test_only_slot_one_creates_one_student_and_one_allocation(db_service, computer):
    request = AllocateStudentsRequest(computer_id=computer.id, student1=_slot(" Asha ", "R01", "a"))

    result = allocation_service.allocate_students(request, db_service)

    assert len(result["students"]) == 1
    assert len(result["allocations"]) == 1
    students = db_service.get_all_students()
    allocations = db_service.get_all_allocations()
    assert len(students) == 1 and len(allocations) == 1
    assert students[0].name == "Asha"
    assert students[0].section == "A"
    assert allocations[0].student_id == students[0].id
    assert allocations[0].computer_id == computer.id


def test_both_slots_create_two_allocations_to_same_computer(db_service, computer):
    request = AllocateStudentsRequest(
        computer_id=computer.id,
        student1=_slot("Asha", "R01", "A"),
        student2=_slot("Bilal", "R02", "B"),
    )
    allocation_service.allocate_students(request, db_service)

    assert db_service.get_allocation_counts() == {computer.id: 2}


def test_unknown_computer_creates_nothing(db_service):
    request = AllocateStudentsRequest(computer_id="cmp_missing", student1=_slot("Asha", "R01", "A"))

    assert allocation_service.allocate_students(request, db_service) is None
    assert db_service.get_all_students() == []


def test_failure_midway_rolls_back_the_whole_request(db_service, computer, monkeypatch):
    original_add_allocation = db_service.add_allocation
    calls = []

    def flaky_add_allocation(record, commit=True):
        if calls:
            raise OperationalError("INSERT INTO allocations", {}, Exception("connection lost"))
        calls.append(record)
        return original_add_allocation(record, commit=commit)

    monkeypatch.setattr(db_service, "add_allocation", flaky_add_allocation)
    request = AllocateStudentsRequest(
        computer_id=computer.id,
        student1=_slot("Asha", "R01", "A"),
        student2=_slot("Bilal", "R02", "B"),
    )

    with pytest.raises(OperationalError):
        allocation_service.allocate_students(request, db_service)

    # Neither student survives, and no allocation was left behind.
    assert db_service.get_all_students() == []
    assert db_service.get_all_allocations() == []


# --- Single allocation changes ---

def test_create_allocation_for_existing_student(db_service, computer):
    db_service.add_student({"id": "stu_1", "name": "Asha", "studentId": "R01", "section": "A"})

    allocation = allocation_service.create_allocation("stu_1", computer.id, db_service)

    assert allocation["student_id"] == "stu_1"
    assert allocation["computer_id"] == computer.id


def test_second_allocation_for_same_student_conflicts(db_service, computer):
    db_service.add_computer({"id": "cmp_lab2", "name": "Computer 2"})
    db_service.add_student({"id": "stu_1", "name": "Asha", "studentId": "R01", "section": "A"})
    allocation_service.create_allocation("stu_1", computer.id, db_service)

    with pytest.raises(allocation_service.AllocationConflictError):
        allocation_service.create_allocation("stu_1", "cmp_lab2", db_service)
    assert len(db_service.get_all_allocations()) == 1


def test_create_allocation_with_unknown_endpoint_returns_none(db_service, computer):
    assert allocation_service.create_allocation("stu_missing", computer.id, db_service) is None


def test_remove_allocation_keeps_student(db_service, computer):
    request = AllocateStudentsRequest(computer_id=computer.id, student1=_slot("Asha", "R01", "A"))
    student_id = allocation_service.allocate_students(request, db_service)["students"][0]["id"]

    assert allocation_service.remove_allocation(student_id, db_service) is True
    assert db_service.get_allocation_by_student_id(student_id) is None
    assert db_service.get_student_by_id(student_id) is not None
    assert allocation_service.remove_allocation(student_id, db_service) is False
