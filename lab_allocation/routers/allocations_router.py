# /lab_allocation/routers/allocations_router.py

from fastapi import APIRouter, Depends, HTTPException, status, Response
from sqlalchemy.exc import SQLAlchemyError

from ..models import allocation_model
from ..services import allocation_service, database_service

router = APIRouter()


@router.post(
    "/students",
    response_model=allocation_model.AllocateStudentsResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create up to Two Students and Allocate Them to a Computer"
)
def allocate_new_students(
    payload: allocation_model.AllocateStudentsRequest,
    db: database_service.DatabaseService = Depends(database_service.get_db_service)
):
    """
    Each filled student row becomes a new student record linked to the
    selected computer. The request is all-or-nothing.
    """
    try:
        result = allocation_service.allocate_students(request=payload, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Computer with ID {payload.computer_id} not found")
    return result


@router.post("", response_model=allocation_model.Allocation, status_code=status.HTTP_201_CREATED, summary="Allocate an Existing Student")
def create_allocation(
    payload: allocation_model.AllocationCreate,
    db: database_service.DatabaseService = Depends(database_service.get_db_service)
):
    try:
        allocation = allocation_service.create_allocation(student_id=payload.student_id, computer_id=payload.computer_id, db=db)
    except allocation_service.AllocationConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")
    if allocation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student or computer not found")
    return allocation


@router.delete(
    "/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a Student's Allocation",
    responses={404: {"description": "The student has no allocation"}}
)
def remove_allocation(student_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    """Unassigns the student from their computer; the student record is kept."""
    try:
        was_removed = allocation_service.remove_allocation(student_id=student_id, db=db)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")
    if not was_removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No allocation found for student {student_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
