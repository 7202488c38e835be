# /lab_allocation/models/student_model.py

# --- Core Imports ---
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List

# --- Model Definitions ---

class Section(str, Enum):
    """The three fixed student groupings."""
    A = "A"
    B = "B"
    C = "C"


class StudentCreate(BaseModel):
    """
    The model for registering a student without allocating them. Values are
    trimmed and checked by the service layer, the same way the allocation
    form's student rows are.
    """
    name: str = Field(..., description="The full name of the student.")
    studentId: str = Field(..., description="The student's roll number.")
    section: str = Field(..., description="One of A, B or C; case-insensitive.")


class StudentUpdate(BaseModel):
    """
    The model for editing a student. The edit replaces all three fields in
    place, so every field is required and may not be blank.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="The full name of the student.")
    studentId: str = Field(..., min_length=1, description="The student's roll number.")
    section: Section


class Student(BaseModel):
    """
    The full representation of a Student resource, as it is stored in the
    database and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="The unique, server-generated identifier for the student.")
    name: str
    studentId: str
    section: Section


class StudentWithComputer(Student):
    """A student joined with the computer they are allocated to, if any."""
    computer_id: Optional[str] = None
    computer_name: Optional[str] = None


class RosterEntry(Student):
    """One row of an allocation roster; `position` is 1-based."""
    position: int


class Roster(BaseModel):
    """The students allocated to one computer within one section."""
    computer_id: str
    computer_name: str
    section: Section
    studentCount: int
    students: List[RosterEntry]
