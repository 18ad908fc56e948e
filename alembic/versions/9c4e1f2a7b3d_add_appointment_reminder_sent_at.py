"""add_appointment_reminder_sent_at

Revision ID: 9c4e1f2a7b3d
Revises: 5b2d7c41e9a0
Create Date: 2025-11-17 09:41:05.552910

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '9c4e1f2a7b3d'
down_revision: Union[str, Sequence[str], None] = '5b2d7c41e9a0'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column('appointments', sa.Column('reminder_sent_at', sa.DateTime(), nullable=True))


def downgrade() -> None:
    op.drop_column('appointments', 'reminder_sent_at')
