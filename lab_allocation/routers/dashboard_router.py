# /lab_allocation/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service
from ..models.dashboard_model import DashboardSummary

router = APIRouter()


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Headline counts of computers, students and allocations."
)
def get_dashboard_summary(db: DatabaseService = Depends(get_db_service)):
    # Delegate immediately to the service layer.
    return dashboard_service.get_summary_data(db=db)
