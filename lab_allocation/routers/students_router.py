# /lab_allocation/routers/students_router.py

from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional

from ..models import student_model
from ..services import student_service, database_service

router = APIRouter()


@router.get("", response_model=List[student_model.StudentWithComputer], summary="Get All Students with Their Computer")
def get_all_students(
    section: Optional[student_model.Section] = None,
    unallocated_only: bool = False,
    db: database_service.DatabaseService = Depends(database_service.get_db_service)
):
    try:
        return student_service.get_all_students(db=db, section=section, unallocated_only=unallocated_only)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")

@router.post("", response_model=student_model.StudentWithComputer, status_code=status.HTTP_201_CREATED, summary="Create a Student Without an Allocation")
def create_new_student(student_data: student_model.StudentCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        return student_service.create_student(student_data=student_data, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")

@router.put("/{student_id}", response_model=student_model.Student, summary="Update a Student")
def update_student_details(student_id: str, student_update: student_model.StudentUpdate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        updated_student = student_service.update_student(student_id=student_id, student_update=student_update, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")
    if updated_student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return updated_student

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student and Their Allocation")
def delete_student(student_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        was_deleted = student_service.delete_student(student_id=student_id, db=db)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")
    if not was_deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
