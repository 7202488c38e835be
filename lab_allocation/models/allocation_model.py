# /lab_allocation/models/allocation_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List

from .student_model import Student

# --- Model Definitions ---

class StudentSlot(BaseModel):
    """
    One of the two optional student rows on the allocation form.

    Fields are free text here on purpose: a slot only counts as filled when
    all three values are non-blank, and partially filled slots are skipped.
    """
    name: str = ""
    studentId: str = ""
    section: str = ""


class AllocateStudentsRequest(BaseModel):
    """Creates up to two new students and assigns them to one computer."""
    computer_id: str = Field(default="", description="The computer the students will share.")
    student1: Optional[StudentSlot] = None
    student2: Optional[StudentSlot] = None


class AllocationCreate(BaseModel):
    """Assigns an existing student to a computer."""
    student_id: str
    computer_id: str


class Allocation(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    computer_id: str


class AllocateStudentsResponse(BaseModel):
    computer_id: str
    students: List[Student]
    allocations: List[Allocation]
