# /lab_allocation/services/computer_service.py

"""
Business logic for lab computers: listing them (with derived student counts,
in natural name order), registering new ones, and deleting them together with
their allocations.
"""

import logging
import uuid
from typing import List, Dict, Optional

from ..models import computer_model
from .database_service import DatabaseService
from .natural_sort import natural_sorted

logger = logging.getLogger(__name__)


def _summarize(computer, counts: Dict[str, int]) -> Dict:
    return {
        "id": computer.id,
        "name": computer.name,
        "location": computer.location,
        "studentCount": counts.get(computer.id, 0),
    }


def get_all_computers_with_summary(db: DatabaseService, search: Optional[str] = None) -> List[Dict]:
    """
    Retrieves all computers, each annotated with the number of students
    allocated to it, sorted naturally by name ("Computer 2" before
    "Computer 10").

    `search`, when given, keeps only computers whose name contains it,
    ignoring case.
    """
    all_computers = db.get_all_computers()
    if not all_computers:
        return []

    counts = db.get_allocation_counts()
    summaries = [_summarize(computer, counts) for computer in all_computers]

    if search and search.strip():
        needle = search.strip().lower()
        summaries = [c for c in summaries if needle in c["name"].lower()]

    return natural_sorted(summaries, key=lambda c: c["name"])


def get_computer_summary(computer_id: str, db: DatabaseService) -> Optional[Dict]:
    computer = db.get_computer_by_id(computer_id)
    if not computer:
        return None
    return _summarize(computer, db.get_allocation_counts())


def create_computer(computer_data: computer_model.ComputerCreate, db: DatabaseService) -> Dict:
    """
    Registers a new computer. The name is required; an empty or blank
    location is stored as NULL.
    """
    name = (computer_data.name or "").strip()
    if not name:
        raise ValueError("Computer name is required")
    location = (computer_data.location or "").strip() or None

    record = {"id": f"cmp_{uuid.uuid4().hex[:12]}", "name": name, "location": location}
    new_computer = db.add_computer(record)
    logger.info(f"Added computer {new_computer.id} ({name})")
    return {**new_computer.to_dict(), "studentCount": 0}


def delete_computer_by_id(computer_id: str, db: DatabaseService) -> bool:
    """Deletes a computer and every allocation that references it."""
    removed = db.delete_computer(computer_id)
    if removed is None:
        return False
    logger.info(f"Deleted computer {computer_id} and {removed} allocation(s)")
    return True
