# /lab_allocation/services/student_service.py

"""
This service module holds the business logic for student records and for the
allocation roster view: which students of a given section are assigned to a
given computer.

The roster builder (`build_allocation_roster`) is a pure function over data
that has already been fetched, so it can be exercised without a database.
"""

import logging
import uuid
from typing import List, Dict, Optional

import pandas as pd

from ..models import student_model
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

ROSTER_EXPORT_COLUMNS = ['#', 'Student Name', 'Roll Number', 'Section', 'Computer']

VALID_SECTIONS = {section.value for section in student_model.Section}


# --- Student Field Rules ---

def clean_student_fields(name: Optional[str], studentId: Optional[str], section: Optional[str]) -> Dict:
    """Trims the three student fields and upper-cases the section."""
    return {
        "name": (name or "").strip(),
        "studentId": (studentId or "").strip(),
        "section": (section or "").strip().upper(),
    }


def check_section(section: str) -> None:
    if section not in VALID_SECTIONS:
        raise ValueError(f"Section must be one of {', '.join(sorted(VALID_SECTIONS))}")


# --- Allocation View Builder ---

def build_allocation_roster(students: List[Dict], computer_id: str, section: str) -> List[Dict]:
    """
    Filters the full student collection down to the students allocated to
    `computer_id` who belong to `section`.

    Both fields must match exactly. The input order is preserved and each
    returned record gains a 1-based `position`. No match yields an empty
    list, never an error.
    """
    section_value = getattr(section, "value", section)
    roster = []
    for student in students:
        if student.get("computer_id") == computer_id and student.get("section") == section_value:
            roster.append({**student, "position": len(roster) + 1})
    return roster


def get_roster(computer_id: str, section: student_model.Section, db: DatabaseService) -> Optional[Dict]:
    """
    Assembles the roster for one computer and one section, or returns None
    if the computer does not exist.
    """
    computer = db.get_computer_by_id(computer_id)
    if not computer:
        return None

    all_students = db.get_students_with_computers()
    roster = build_allocation_roster(all_students, computer_id, section)
    return {
        "computer_id": computer.id,
        "computer_name": computer.name,
        "section": section,
        "studentCount": len(roster),
        "students": roster,
    }


def export_roster_as_csv(computer_id: str, section: student_model.Section, db: DatabaseService) -> str:
    """Generates a CSV export of a single computer/section roster."""
    roster = get_roster(computer_id, section, db)
    if roster is None:
        raise ValueError(f"Computer with ID {computer_id} not found.")

    export_data = [
        {
            '#': s['position'],
            'Student Name': s['name'],
            'Roll Number': s['studentId'],
            'Section': s['section'],
            'Computer': roster['computer_name'],
        } for s in roster['students']
    ]

    df = pd.DataFrame(export_data) if export_data else pd.DataFrame(columns=ROSTER_EXPORT_COLUMNS)
    return df.to_csv(index=False)


# --- Student CRUD ---

def create_student(student_data: student_model.StudentCreate, db: DatabaseService) -> Dict:
    """
    Registers a student without allocating them to a computer.

    Name, roll number and section are all required after trimming, and the
    section must be A, B or C (any case). Raises ValueError otherwise,
    before the store is touched.
    """
    values = clean_student_fields(student_data.name, student_data.studentId, student_data.section)
    if not all(values.values()):
        raise ValueError("All fields are required")
    check_section(values["section"])

    new_student = db.add_student({"id": f"stu_{uuid.uuid4().hex[:12]}", **values})
    logger.info(f"Created student {new_student.id} in section {new_student.section}")
    return new_student.to_dict()


def get_all_students(
    db: DatabaseService,
    section: Optional[student_model.Section] = None,
    unallocated_only: bool = False
) -> List[Dict]:
    """All students joined with their computer, optionally filtered."""
    students = db.get_students_with_computers()
    if section is not None:
        section_value = getattr(section, "value", section)
        students = [s for s in students if s["section"] == section_value]
    if unallocated_only:
        students = [s for s in students if s["computer_id"] is None]
    return students


def update_student(
    student_id: str,
    student_update: student_model.StudentUpdate,
    db: DatabaseService
) -> Optional[Dict]:
    """
    Replaces a student's name, roll number and section in place.

    All three are required. Validation runs before the store is touched, so
    a rejected edit leaves the existing record unchanged.
    """
    update_data = student_update.model_dump()
    update_data = {key: getattr(value, "value", value) for key, value in update_data.items()}
    update_data = {key: value.strip() if isinstance(value, str) else value for key, value in update_data.items()}

    missing = [key for key in ("name", "studentId", "section") if not update_data.get(key)]
    if missing:
        logger.warning(f"Rejected edit of student {student_id}: missing {', '.join(missing)}")
        raise ValueError("All fields are required")

    updated_student = db.update_student(student_id, update_data)
    if updated_student is None:
        return None
    logger.info(f"Updated student {student_id}")
    return updated_student.to_dict()


def delete_student(student_id: str, db: DatabaseService) -> bool:
    """Deletes a student record along with its allocation."""
    was_deleted = db.delete_student(student_id)
    if was_deleted:
        logger.info(f"Deleted student {student_id}")
    return was_deleted
