# /lab_allocation/db/base.py

# Central registry for all SQLAlchemy models. Importing them here ensures the
# Base metadata knows about every table when `create_all` or Alembic's
# auto-generation runs.

from .base_class import Base

from .models.lab_models import Computer, Student, Allocation
