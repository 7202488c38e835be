# /lab_allocation/services/allocation_service.py

"""
This service module owns every change to the student/computer allocation
relationship.

The main entry point, `allocate_students`, takes the two optional student
rows of the allocation form, creates a student record for each filled row and
links it to the selected computer. The whole request is a single unit of
work: if any step fails, nothing from that request is kept.
"""

import logging
import uuid
from typing import List, Dict, Optional

from sqlalchemy.exc import IntegrityError

from ..models import allocation_model
from .database_service import DatabaseService
from .student_service import check_section, clean_student_fields

logger = logging.getLogger(__name__)


class AllocationConflictError(ValueError):
    """Raised when a student already holds an allocation."""


def _clean_slot(slot: Optional[allocation_model.StudentSlot]) -> Optional[Dict]:
    """
    Returns the trimmed slot values when the slot is filled (name, roll
    number and section all non-blank), otherwise None.
    """
    if slot is None:
        return None
    values = clean_student_fields(slot.name, slot.studentId, slot.section)
    if not all(values.values()):
        return None
    return values


def validate_allocation_request(request: allocation_model.AllocateStudentsRequest) -> List[Dict]:
    """
    Checks an allocation request without touching the store and returns the
    filled slots in form order.
    """
    if not request.computer_id or not request.computer_id.strip():
        raise ValueError("Please select a computer")

    filled = [s for s in (_clean_slot(request.student1), _clean_slot(request.student2)) if s]
    if not filled:
        raise ValueError("Please enter at least one student")

    for slot in filled:
        check_section(slot["section"])
    return filled


def allocate_students(
    request: allocation_model.AllocateStudentsRequest,
    db: DatabaseService
) -> Optional[Dict]:
    """
    Creates up to two students and allocates each of them to the selected
    computer.

    Returns None if the computer does not exist (nothing is created in that
    case). Raises ValueError for invalid input before any write is issued.
    Any store failure rolls back every student and allocation of the request
    and is re-raised.
    """
    filled_slots = validate_allocation_request(request)
    computer_id = request.computer_id.strip()

    if not db.get_computer_by_id(computer_id):
        return None

    created_students = []
    created_allocations = []
    try:
        for slot in filled_slots:
            student = db.add_student({"id": f"stu_{uuid.uuid4().hex[:12]}", **slot}, commit=False)
            allocation = db.add_allocation(
                {"id": f"alc_{uuid.uuid4().hex[:12]}", "student_id": student.id, "computer_id": computer_id},
                commit=False,
            )
            created_students.append(student.to_dict())
            created_allocations.append(allocation.to_dict())
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to allocate students to computer {computer_id}; rolled back: {e}")
        raise

    logger.info(f"Allocated {len(created_students)} student(s) to computer {computer_id}")
    return {"computer_id": computer_id, "students": created_students, "allocations": created_allocations}


def create_allocation(student_id: str, computer_id: str, db: DatabaseService) -> Optional[Dict]:
    """
    Links an existing student to a computer.

    Returns None if either the student or the computer is unknown, and raises
    AllocationConflictError if the student is already allocated.
    """
    if not db.get_student_by_id(student_id) or not db.get_computer_by_id(computer_id):
        return None

    existing = db.get_allocation_by_student_id(student_id)
    if existing:
        raise AllocationConflictError(
            f"Student {student_id} is already allocated to computer {existing.computer_id}"
        )

    try:
        allocation = db.add_allocation(
            {"id": f"alc_{uuid.uuid4().hex[:12]}", "student_id": student_id, "computer_id": computer_id}
        )
    except IntegrityError as e:
        # Another session allocated the student first; the unique key caught it.
        db.rollback()
        raise AllocationConflictError(f"Student {student_id} is already allocated") from e
    logger.info(f"Allocated student {student_id} to computer {computer_id}")
    return allocation.to_dict()


def remove_allocation(student_id: str, db: DatabaseService) -> bool:
    """Deletes a student's allocation while keeping the student record."""
    was_removed = db.delete_allocation_by_student_id(student_id)
    if was_removed:
        logger.info(f"Removed allocation for student {student_id}")
    return was_removed
