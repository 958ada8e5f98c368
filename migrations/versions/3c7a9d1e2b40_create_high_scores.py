"""create high_scores

Revision ID: 3c7a9d1e2b40
Revises:
Create Date: 2026-01-30 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7a9d1e2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # Tables may already exist when created with `flask db-reset`
    if 'high_scores' in set(insp.get_table_names()):
        return

    op.create_table(
        'high_scores',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('streak >= 0', name='ck_high_scores_streak_non_negative'),
    )
    op.create_index('ix_high_scores_created_at', 'high_scores', ['created_at'])
    op.create_index('index_high_scores_on_streak', 'high_scores', [sa.text('streak DESC')])


def downgrade():
    op.drop_index('index_high_scores_on_streak', table_name='high_scores')
    op.drop_index('ix_high_scores_created_at', table_name='high_scores')
    op.drop_table('high_scores')
