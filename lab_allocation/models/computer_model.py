# /lab_allocation/models/computer_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

# --- Model Definitions ---

class ComputerCreate(BaseModel):
    """
    The model used for registering a new lab computer. Blank names are
    rejected by the service layer after trimming.
    """
    name: str = Field(..., description="Display name, e.g. 'Computer 12'.")
    location: Optional[str] = Field(default=None, description="Where the computer sits in the lab.")


class Computer(BaseModel):
    """A computer as stored in the database."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="The unique, server-generated identifier for the computer.")
    name: str
    location: Optional[str] = None


class ComputerSummary(Computer):
    """A computer enriched with the number of students allocated to it."""
    studentCount: int = Field(default=0, description="Derived on every read from the allocations table.")
