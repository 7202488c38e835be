# /lab_allocation/services/dashboard_service.py

import logging

import pandas as pd

from ..models.dashboard_model import DashboardSummary
from ..models.student_model import Section
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def get_summary_data(db: DatabaseService) -> DashboardSummary:
    """
    Calculates the dashboard summary statistics by retrieving data from the
    database service and performing aggregations.

    Args:
        db: An instance of the DatabaseService, provided by dependency injection.

    Returns:
        A DashboardSummary Pydantic object containing the calculated counts.
    """
    try:
        all_computers = db.get_all_computers()
        students_df = pd.DataFrame(db.get_students_with_computers())

        section_counts = {section.value: 0 for section in Section}
        allocated_count = 0
        if not students_df.empty:
            section_counts.update(students_df.groupby('section').size().to_dict())
            allocated_count = int(students_df['computer_id'].notna().sum())

        return DashboardSummary(
            computerCount=len(all_computers),
            studentCount=len(students_df),
            allocatedCount=allocated_count,
            unallocatedCount=len(students_df) - allocated_count,
            sectionCounts={key: int(value) for key, value in section_counts.items()},
        )
    except Exception as e:
        logger.error(f"Error calculating summary data: {e}")
        # Re-raise so the router layer turns it into a 500.
        raise
