# /lab_allocation/routers/computers_router.py

from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional

from ..models import computer_model, student_model
from ..services import computer_service, student_service, database_service

router = APIRouter()

# --- COMPUTER COLLECTION ENDPOINTS (/api/computers) ---

@router.get("", response_model=List[computer_model.ComputerSummary], summary="Get All Computers with Student Counts")
def get_all_computers(search: Optional[str] = None, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        return computer_service.get_all_computers_with_summary(db=db, search=search)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")

@router.post("", response_model=computer_model.ComputerSummary, status_code=status.HTTP_201_CREATED, summary="Add a Computer")
def create_new_computer(computer_create: computer_model.ComputerCreate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        return computer_service.create_computer(computer_data=computer_create, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")

# --- INDIVIDUAL COMPUTER RESOURCE ENDPOINTS (/api/computers/{computer_id}) ---

@router.get("/{computer_id}", response_model=computer_model.ComputerSummary, summary="Get a Single Computer")
def get_computer_by_id(computer_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    computer = computer_service.get_computer_summary(computer_id=computer_id, db=db)
    if computer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Computer with ID {computer_id} not found")
    return computer

@router.delete("/{computer_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Computer and Its Allocations")
def delete_computer(computer_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        was_deleted = computer_service.delete_computer_by_id(computer_id=computer_id, db=db)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected server error occurred: {e}")
    if not was_deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Computer with ID {computer_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- ROSTER SUB-RESOURCE ENDPOINTS ---

@router.get("/{computer_id}/sections/{section}/students", response_model=student_model.Roster, summary="Get Students Allocated to a Computer in a Section")
def get_roster(computer_id: str, section: student_model.Section, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    roster = student_service.get_roster(computer_id=computer_id, section=section, db=db)
    if roster is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Computer with ID {computer_id} not found")
    return roster

@router.get("/{computer_id}/sections/{section}/export", summary="Export a Roster as CSV", response_class=StreamingResponse)
def export_roster_csv(computer_id: str, section: student_model.Section, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        csv_string = student_service.export_roster_as_csv(computer_id=computer_id, section=section, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    file_name = f"roster_{computer_id}_section_{section.value.lower()}.csv"
    return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})
