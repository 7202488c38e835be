# /lab_allocation/models/dashboard_model.py

# --- Core Imports ---
from typing import Dict

from pydantic import BaseModel, Field

# --- Model Definition ---

class DashboardSummary(BaseModel):
    """
    Defines the data contract for the dashboard summary endpoint: the
    headline numbers an admin sees before drilling into a computer.
    """

    computerCount: int = Field(..., description="The number of registered lab computers.", examples=[24])
    studentCount: int = Field(..., description="The number of student records.", examples=[96])
    allocatedCount: int = Field(..., description="Students currently assigned to a computer.", examples=[90])
    unallocatedCount: int = Field(..., description="Students with no computer.", examples=[6])
    sectionCounts: Dict[str, int] = Field(
        ...,
        description="Number of students per section (A, B, C).",
        examples=[{"A": 32, "B": 32, "C": 32}]
    )
