"""Create computers, students and allocations tables

Revision ID: 3a1f9c2d7b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a1f9c2d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the lab tables; one allocation per student is enforced by a unique key."""
    op.create_table(
        'computers',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_computers_id', 'computers', ['id'])
    op.create_index('ix_computers_name', 'computers', ['name'])

    op.create_table(
        'students',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('studentId', sa.String(), nullable=False),
        sa.Column('section', sa.String(length=1), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("section IN ('A', 'B', 'C')", name='ck_students_section'),
    )
    op.create_index('ix_students_id', 'students', ['id'])
    op.create_index('ix_students_name', 'students', ['name'])
    op.create_index('ix_students_studentId', 'students', ['studentId'])

    op.create_table(
        'allocations',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('student_id', sa.String(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('computer_id', sa.String(), sa.ForeignKey('computers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_allocations_id', 'allocations', ['id'])
    op.create_index('ix_allocations_student_id', 'allocations', ['student_id'], unique=True)
    op.create_index('ix_allocations_computer_id', 'allocations', ['computer_id'])


def downgrade() -> None:
    """Drop the lab tables."""
    op.drop_table('allocations')
    op.drop_table('students')
    op.drop_table('computers')
