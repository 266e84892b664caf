"""initial schema: users, problems, progress, achievements, daily puzzles

Revision ID: 20261018120000
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261018120000'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create every table the app uses."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('grade', sa.Integer(), nullable=True),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('level', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('last_active', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'security_questions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('question', sa.String(length=255), nullable=False),
        sa.Column('answer_hash', sa.String(), nullable=False),
        sa.Column('answer_salt', sa.String(), nullable=False),
        sa.UniqueConstraint('user_id', 'question', name='uq_user_security_question'),
    )
    op.create_index('ix_security_questions_id', 'security_questions', ['id'])
    op.create_index('ix_security_questions_user_id', 'security_questions', ['user_id'])

    op.create_table(
        'problems',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('grade', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('answer', sa.String(length=50), nullable=False),
        sa.Column('explanation', sa.Text(), nullable=False),
        sa.Column('hint', sa.Text(), nullable=True),
        sa.Column('options', sa.JSON(), nullable=True),
        sa.Column('difficulty', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('skill_level', sa.String(length=20), nullable=True),
        sa.Column('common_mistakes', sa.JSON(), nullable=True),
        sa.Column('required_steps', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_problems_id', 'problems', ['id'])
    op.create_index('ix_problems_grade', 'problems', ['grade'])

    op.create_table(
        'progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('problem_id', sa.Integer(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_attempt', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('user_id', 'problem_id', name='uq_user_problem_progress'),
    )
    op.create_index('ix_progress_id', 'progress', ['id'])
    op.create_index('ix_progress_user_id', 'progress', ['user_id'])

    op.create_table(
        'achievements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('icon', sa.String(length=16), nullable=False, server_default=''),
        sa.Column('category', sa.String(length=32), nullable=False, server_default='practice'),
        sa.Column('progress', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('target', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('earned_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'type', name='uq_user_achievement'),
    )
    op.create_index('ix_achievements_id', 'achievements', ['id'])
    op.create_index('ix_achievements_user_id', 'achievements', ['user_id'])

    op.create_table(
        'daily_puzzles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('puzzle_date', sa.Date(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('scenario', sa.Text(), nullable=False),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('grade', sa.Integer(), nullable=False),
        sa.Column('answer', sa.String(length=50), nullable=False),
        sa.Column('explanation', sa.Text(), nullable=False),
        sa.Column('options', sa.JSON(), nullable=True),
        sa.Column('difficulty', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('real_world_context', sa.Text(), nullable=False, server_default=''),
        sa.Column('visual_aid', sa.Text(), nullable=True),
        sa.Column('reward', sa.Integer(), nullable=False, server_default='10'),
        sa.Column('problem_id', sa.Integer(), nullable=True),
    )
    op.create_index('ix_daily_puzzles_id', 'daily_puzzles', ['id'])
    op.create_index('ix_daily_puzzles_puzzle_date', 'daily_puzzles', ['puzzle_date'], unique=True)

    op.create_table(
        'daily_puzzle_attempts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('puzzle_id', sa.Integer(), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('solved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('attempt_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('solved_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('user_id', 'puzzle_id', name='uq_user_daily_puzzle'),
    )
    op.create_index('ix_daily_puzzle_attempts_id', 'daily_puzzle_attempts', ['id'])
    op.create_index('ix_daily_puzzle_attempts_user_id', 'daily_puzzle_attempts', ['user_id'])


def downgrade() -> None:
    """Drop every table, dependents first."""
    op.drop_table('daily_puzzle_attempts')
    op.drop_table('daily_puzzles')
    op.drop_table('achievements')
    op.drop_table('progress')
    op.drop_table('problems')
    op.drop_table('security_questions')
    op.drop_table('users')
