"""initial schema: users, classes, students, sessions, attendance

Revision ID: 7c2e4a91d0b3
Revises:
Create Date: 2026-01-12 21:14:05.118420

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c2e4a91d0b3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('admin', 'teacher', 'parent', name='user_role'), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'classes',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('teacher_id', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('location_id', sa.String(), nullable=True),
        sa.Column('grade', sa.String(), nullable=True),
        sa.Column('default_schedule', sa.Text(), nullable=True),
    )
    op.create_index('ix_classes_id', 'classes', ['id'])

    op.create_table(
        'students',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('parent_id', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('attendance', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_students_id', 'students', ['id'])

    op.create_table(
        'enrollments',
        sa.Column('student_id', sa.String(), sa.ForeignKey('students.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'sessions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False, server_default='60'),
        sa.Column('type', sa.Enum('REGULAR', 'MAKEUP', 'TRIAL', name='session_type'), nullable=False),
        sa.Column(
            'status',
            sa.Enum('SCHEDULED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED', name='session_status'),
            nullable=False,
        ),
        sa.Column('target_student_ids', sa.JSON(), nullable=True),
        # Планировщик полагается на это ограничение: INSERT ... ON CONFLICT DO NOTHING
        sa.UniqueConstraint('class_id', 'date', name='uq_sessions_class_date'),
    )
    op.create_index('ix_sessions_id', 'sessions', ['id'])
    op.create_index('ix_sessions_class_id', 'sessions', ['class_id'])
    op.create_index('ix_sessions_date', 'sessions', ['date'])

    op.create_table(
        'attendance',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('session_id', sa.String(), sa.ForeignKey('sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', sa.String(), sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'status',
            sa.Enum('PRESENT', 'ABSENT', 'LATE', 'EXCUSED', name='attendance_status'),
            nullable=False,
        ),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.UniqueConstraint('session_id', 'student_id', name='uq_attendance_session_student'),
    )
    op.create_index('ix_attendance_id', 'attendance', ['id'])
    op.create_index('ix_attendance_session_id', 'attendance', ['session_id'])
    op.create_index('ix_attendance_student_id', 'attendance', ['student_id'])


def downgrade() -> None:
    op.drop_table('attendance')
    op.drop_table('sessions')
    op.drop_table('enrollments')
    op.drop_table('students')
    op.drop_table('classes')
    op.drop_table('users')
    # На PostgreSQL enum-типы живут отдельно от таблиц
    bind = op.get_bind()
    for name in ('attendance_status', 'session_status', 'session_type', 'user_role'):
        sa.Enum(name=name).drop(bind, checkfirst=True)
