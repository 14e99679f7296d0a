"""initial schema

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

ACTIVE_WHERE = sa.text("status IN ('PENDING', 'APPROVED')")


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('first_name', sa.String(120), nullable=False),
        sa.Column('last_name', sa.String(120)),
        sa.Column('phone', sa.String(40)),
        sa.Column('address', sa.String(255)),
        sa.Column('date_of_birth', sa.Date()),
        sa.Column('gender', sa.String(20)),
        sa.Column('civil_status', sa.String(20)),
        sa.Column('nationality', sa.String(80)),
        *_timestamps(),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('applicant_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('program', sa.String(200), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('result', sa.String(10)),
        sa.Column('total_score', sa.Float()),
        sa.Column('attempt_number', sa.Integer(), nullable=False),
        sa.Column('position', sa.String(200)),
        sa.Column('subject_specialization', sa.String(200)),
        sa.Column('educational_background', sa.Text()),
        sa.Column('teaching_experience', sa.Text()),
        sa.Column('motivation', sa.Text()),
        sa.Column('documents', sa.JSON()),
        sa.Column('demo_schedule', sa.DateTime()),
        sa.Column('demo_location', sa.String(255)),
        sa.Column('demo_duration', sa.Integer()),
        sa.Column('demo_notes', sa.Text()),
        sa.Column('hr_notes', sa.Text()),
        sa.Column('interview_eligible', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('initial_interview_schedule', sa.DateTime()),
        sa.Column('initial_interview_result', sa.String(10)),
        sa.Column('final_interview_schedule', sa.DateTime()),
        sa.Column('final_interview_result', sa.String(10)),
        *_timestamps(),
        sa.UniqueConstraint('applicant_id', 'attempt_number', name='uq_applications_applicant_attempt'),
    )
    op.create_index('ix_applications_applicant_id', 'applications', ['applicant_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])
    op.create_index('uq_applications_one_active', 'applications', ['applicant_id'], unique=True,
                    sqlite_where=ACTIVE_WHERE, postgresql_where=ACTIVE_WHERE)

    op.create_table(
        'rubrics',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('criteria', sa.String(255), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('max_score', sa.Float(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('state', sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_rubrics_state', 'rubrics', ['state'])

    op.create_table(
        'scores',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('application_id', sa.Integer(), sa.ForeignKey('applications.id', ondelete='CASCADE'), nullable=False),
        sa.Column('rubric_id', sa.Integer(), sa.ForeignKey('rubrics.id'), nullable=False),
        sa.Column('score_value', sa.Float(), nullable=False),
        sa.Column('comments', sa.Text()),
        *_timestamps(),
        sa.UniqueConstraint('application_id', 'rubric_id', name='uq_scores_application_rubric'),
    )
    op.create_index('ix_scores_application_id', 'scores', ['application_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('application_id', sa.Integer()),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('provider_message_id', sa.String(255)),
        sa.Column('sent_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_notifications_application_id', 'notifications', ['application_id'])
    op.create_index('ix_notifications_email', 'notifications', ['email'])

    op.create_table(
        'pre_employment_requirements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        *[sa.Column(name, sa.String(512)) for name in (
            'photo_2x2', 'coe', 'marriage_contract', 'prc_license', 'civil_service',
            'masters_units', 'car', 'tor', 'other_cert')],
        sa.Column('tesda_certs', sa.JSON()),
        *[sa.Column(name, sa.String(40)) for name in (
            'sss_number', 'philhealth_number', 'pagibig_number', 'tin_number')],
        *_timestamps(),
    )


def downgrade():
    op.drop_table('pre_employment_requirements')
    op.drop_index('ix_notifications_email', table_name='notifications')
    op.drop_index('ix_notifications_application_id', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_scores_application_id', table_name='scores')
    op.drop_table('scores')
    op.drop_index('ix_rubrics_state', table_name='rubrics')
    op.drop_table('rubrics')
    op.drop_index('uq_applications_one_active', table_name='applications')
    op.drop_index('ix_applications_status', table_name='applications')
    op.drop_index('ix_applications_applicant_id', table_name='applications')
    op.drop_table('applications')
    op.drop_index('ix_users_role', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
