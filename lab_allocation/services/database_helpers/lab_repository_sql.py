# /lab_allocation/services/database_helpers/lab_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Computer, Student
and Allocation tables. It is the only place in the application that talks to
the database session directly.

Write methods accept a `commit` flag. Single-step operations commit
immediately; multi-step flows (creating a student and linking it to a
computer) pass `commit=False` so that everything is flushed into one
transaction and committed, or rolled back, by the caller. A write that fails
is rolled back and logged here before the error is re-raised.
"""

import logging
from contextlib import contextmanager
from typing import List, Dict, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...db.models.lab_models import Computer, Student, Allocation

logger = logging.getLogger(__name__)


class LabRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Unit of Work ---

    @contextmanager
    def _write(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}; rolled back: {e}")
            raise

    def _finish(self, commit: bool) -> None:
        if commit:
            self.db.commit()
        else:
            self.db.flush()

    def commit(self) -> None:
        with self._write("commit transaction"):
            self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    # --- Computer Methods ---

    def get_all_computers(self) -> List[Computer]:
        return self.db.query(Computer).all()

    def get_computer_by_id(self, computer_id: str) -> Optional[Computer]:
        return self.db.query(Computer).filter(Computer.id == computer_id).first()

    def add_computer(self, record: Dict, commit: bool = True) -> Computer:
        new_computer = Computer(**record)
        with self._write(f"add computer {new_computer.id}"):
            self.db.add(new_computer)
            self._finish(commit)
            self.db.refresh(new_computer)
        return new_computer

    def delete_computer(self, computer_id: str) -> Optional[int]:
        """
        Deletes a computer together with every allocation that references it.

        The dependent allocations are removed explicitly before the computer
        itself so that no orphaned rows survive even on a store that does not
        enforce ON DELETE CASCADE. Returns the number of allocations removed,
        or None if the computer does not exist.
        """
        db_computer = self.get_computer_by_id(computer_id)
        if not db_computer:
            return None
        with self._write(f"delete computer {computer_id}"):
            removed = (
                self.db.query(Allocation)
                .filter(Allocation.computer_id == computer_id)
                .delete(synchronize_session=False)
            )
            self.db.expire(db_computer, ["allocations"])
            self.db.delete(db_computer)
            self.db.commit()
        return removed

    def get_allocation_counts(self) -> Dict[str, int]:
        """Returns {computer_id: number of allocations} for computers that have any."""
        rows = (
            self.db.query(Allocation.computer_id, func.count(Allocation.id))
            .group_by(Allocation.computer_id)
            .all()
        )
        return {computer_id: count for computer_id, count in rows}

    # --- Student Methods ---

    def get_all_students(self) -> List[Student]:
        return self.db.query(Student).order_by(Student.name, Student.id).all()

    def get_student_by_id(self, student_id: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.id == student_id).first()

    def get_students_with_computers(self) -> List[Dict]:
        """
        Returns every student as a flat dictionary joined with the computer
        they are allocated to. Unallocated students carry None for both
        computer fields.
        """
        rows = (
            self.db.query(Student, Computer.id, Computer.name)
            .outerjoin(Allocation, Allocation.student_id == Student.id)
            .outerjoin(Computer, Computer.id == Allocation.computer_id)
            .order_by(Student.name, Student.id)
            .all()
        )
        students = []
        for student, computer_id, computer_name in rows:
            record = student.to_dict()
            record["computer_id"] = computer_id
            record["computer_name"] = computer_name
            students.append(record)
        return students

    def add_student(self, record: Dict, commit: bool = True) -> Student:
        new_student = Student(**record)
        with self._write(f"add student {new_student.id}"):
            self.db.add(new_student)
            self._finish(commit)
            self.db.refresh(new_student)
        return new_student

    def update_student(self, student_id: str, data: Dict) -> Optional[Student]:
        db_student = self.get_student_by_id(student_id)
        if db_student:
            with self._write(f"update student {student_id}"):
                for key, value in data.items():
                    setattr(db_student, key, value)
                self.db.commit()
                self.db.refresh(db_student)
        return db_student

    def delete_student(self, student_id: str) -> bool:
        """Deletes a student; its allocation is removed with it."""
        db_student = self.get_student_by_id(student_id)
        if db_student:
            with self._write(f"delete student {student_id}"):
                self.db.query(Allocation).filter(Allocation.student_id == student_id).delete(
                    synchronize_session=False
                )
                self.db.expire(db_student, ["allocation"])
                self.db.delete(db_student)
                self.db.commit()
            return True
        return False

    # --- Allocation Methods ---

    def get_all_allocations(self) -> List[Allocation]:
        return self.db.query(Allocation).all()

    def get_allocation_by_student_id(self, student_id: str) -> Optional[Allocation]:
        return self.db.query(Allocation).filter(Allocation.student_id == student_id).first()

    def get_allocations_by_computer_id(self, computer_id: str) -> List[Allocation]:
        return self.db.query(Allocation).filter(Allocation.computer_id == computer_id).all()

    def add_allocation(self, record: Dict, commit: bool = True) -> Allocation:
        new_allocation = Allocation(**record)
        with self._write(f"add allocation for student {new_allocation.student_id}"):
            self.db.add(new_allocation)
            self._finish(commit)
            self.db.refresh(new_allocation)
        return new_allocation

    def delete_allocation_by_student_id(self, student_id: str) -> bool:
        with self._write(f"remove allocation of student {student_id}"):
            deleted = (
                self.db.query(Allocation)
                .filter(Allocation.student_id == student_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        return deleted > 0
