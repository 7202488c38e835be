# /lab_allocation/db/models/lab_models.py

"""
This module defines the SQLAlchemy ORM models for the lab: the `Computer`
workstations, the `Student` records, and the `Allocation` rows that link one
student to one computer.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base

SECTIONS = ("A", "B", "C")


class Computer(Base):
    """
    SQLAlchemy model representing a single lab computer.

    The number of students using it is derived from its allocations on every
    read and is never stored.
    """
    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    location = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Deleting a computer deletes every allocation that points at it.
    allocations = relationship(
        "Allocation", back_populates="computer", cascade="all, delete"
    )


class Student(Base):
    """
    SQLAlchemy model representing a student enrolled in one of the sections.
    """
    __table_args__ = (
        CheckConstraint("section IN ('A', 'B', 'C')", name="ck_students_section"),
    )

    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    # The school-issued roll number.
    studentId = Column(String, index=True, nullable=False)
    section = Column(String(1), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # At most one allocation per student, removed together with the student.
    allocation = relationship(
        "Allocation", back_populates="student", uselist=False,
        cascade="all, delete"
    )


class Allocation(Base):
    """
    SQLAlchemy model linking exactly one Student to exactly one Computer.

    The unique constraint on `student_id` is what enforces the
    one-allocation-per-student rule at the storage level.
    """
    id = Column(String, primary_key=True, index=True)
    student_id = Column(
        String, ForeignKey("students.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    computer_id = Column(
        String, ForeignKey("computers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="allocation")
    computer = relationship("Computer", back_populates="allocations")
