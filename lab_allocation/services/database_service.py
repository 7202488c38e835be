# /lab_allocation/services/database_service.py

from typing import List, Dict, Optional, Generator

from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from ..db.database import get_db

# --- Repository Imports ---
from .database_helpers.lab_repository_sql import LabRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Initializes the DatabaseService on top of a live SQLAlchemy session.
        Every service function receives one of these instead of the raw session.
        """
        if db_session is None:
            raise ValueError("A database session is required.")
        self.lab_repo = LabRepositorySQL(db_session)

    # --- UNIT OF WORK (DELEGATED) ---
    def commit(self) -> None: self.lab_repo.commit()
    def rollback(self) -> None: self.lab_repo.rollback()

    # --- COMPUTER METHODS (DELEGATED) ---
    def get_all_computers(self) -> List: return self.lab_repo.get_all_computers()
    def get_computer_by_id(self, computer_id: str): return self.lab_repo.get_computer_by_id(computer_id)
    def add_computer(self, computer_record: Dict, commit: bool = True): return self.lab_repo.add_computer(computer_record, commit=commit)
    def delete_computer(self, computer_id: str) -> Optional[int]: return self.lab_repo.delete_computer(computer_id)
    def get_allocation_counts(self) -> Dict[str, int]: return self.lab_repo.get_allocation_counts()

    # --- STUDENT METHODS (DELEGATED) ---
    def get_all_students(self) -> List: return self.lab_repo.get_all_students()
    def get_student_by_id(self, student_id: str): return self.lab_repo.get_student_by_id(student_id)
    def get_students_with_computers(self) -> List[Dict]: return self.lab_repo.get_students_with_computers()
    def add_student(self, student_record: Dict, commit: bool = True): return self.lab_repo.add_student(student_record, commit=commit)
    def update_student(self, student_id: str, student_update_data: Dict): return self.lab_repo.update_student(student_id, student_update_data)
    def delete_student(self, student_id: str) -> bool: return self.lab_repo.delete_student(student_id)

    # --- ALLOCATION METHODS (DELEGATED) ---
    def get_all_allocations(self) -> List: return self.lab_repo.get_all_allocations()
    def get_allocation_by_student_id(self, student_id: str): return self.lab_repo.get_allocation_by_student_id(student_id)
    def get_allocations_by_computer_id(self, computer_id: str) -> List: return self.lab_repo.get_allocations_by_computer_id(computer_id)
    def add_allocation(self, allocation_record: Dict, commit: bool = True): return self.lab_repo.add_allocation(allocation_record, commit=commit)
    def delete_allocation_by_student_id(self, student_id: str) -> bool: return self.lab_repo.delete_allocation_by_student_id(student_id)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService instance."""
    yield DatabaseService(db_session=db)
