"""
Initial UniGig schema: principals, role profiles, jobs, applications, tokens, audit log

Revision ID: 20261019_initial_schema
Revises:
Create Date: 2026-10-19
"""
revision = '20261019_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

userrole = sa.Enum('student', 'employer', name='userrole')
# The profile tables reference the type created with users
userrole_ref = sa.Enum('student', 'employer', name='userrole').with_variant(
    postgresql.ENUM('student', 'employer', name='userrole', create_type=False), 'postgresql')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('role', userrole, nullable=False),
        sa.Column('hashed_password', sa.String, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('id', 'role', name='uq_users_id_role'),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'student_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False, unique=True),
        sa.Column('role', userrole_ref, nullable=False),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('bio', sa.Text, nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('university', sa.String(200), nullable=True),
        sa.Column('major', sa.String(200), nullable=True),
        sa.Column('year_of_study', sa.Integer, nullable=True),
        sa.Column('skills', sa.JSON, nullable=True),
        sa.Column('resume_url', sa.String(1000), nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
        sa.ForeignKeyConstraint(['user_id', 'role'], ['users.id', 'users.role'],
                                name='fk_student_profiles_user_role', ondelete='CASCADE'),
        sa.CheckConstraint("role = 'student'", name='ck_student_profiles_role'),
    )
    op.create_index('ix_student_profiles_user_id', 'student_profiles', ['user_id'])

    op.create_table(
        'employer_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False, unique=True),
        sa.Column('role', userrole_ref, nullable=False),
        sa.Column('company_name', sa.String(200), nullable=False),
        sa.Column('company_description', sa.Text, nullable=True),
        sa.Column('industry', sa.String(200), nullable=True),
        sa.Column('website', sa.String(500), nullable=True),
        sa.Column('contact_person', sa.String(200), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
        sa.ForeignKeyConstraint(['user_id', 'role'], ['users.id', 'users.role'],
                                name='fk_employer_profiles_user_role', ondelete='CASCADE'),
        sa.CheckConstraint("role = 'employer'", name='ck_employer_profiles_role'),
    )
    op.create_index('ix_employer_profiles_user_id', 'employer_profiles', ['user_id'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('employer_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('requirements', sa.Text, nullable=True),
        sa.Column('skills_required', sa.JSON, nullable=True),
        sa.Column('budget_min', sa.Float, nullable=True),
        sa.Column('budget_max', sa.Float, nullable=True),
        sa.Column('deadline', sa.Date, nullable=True),
        sa.Column('job_type', sa.String(20), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='open'),
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )
    op.create_index('ix_jobs_employer_id', 'jobs', ['employer_id'])
    op.create_index('ix_jobs_status', 'jobs', ['status'])
    op.create_index('ix_jobs_created_at', 'jobs', ['created_at'])

    op.create_table(
        'job_applications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('cover_letter', sa.Text, nullable=True),
        sa.Column('applied_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
        sa.UniqueConstraint('job_id', 'student_id', name='uq_job_applications_job_student'),
    )
    op.create_index('ix_job_applications_job_id', 'job_applications', ['job_id'])
    op.create_index('ix_job_applications_student_id', 'job_applications', ['student_id'])

    op.create_table(
        'revoked_tokens',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('jti', sa.String(64), nullable=False, unique=True),
        sa.Column('user_id', sa.String(36), nullable=True),
        sa.Column('revoked_at', sa.DateTime, nullable=True),
    )
    op.create_index('ix_revoked_tokens_jti', 'revoked_tokens', ['jti'])

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('action', sa.String(100), nullable=False),
        sa.Column('status', sa.String(50), nullable=False),
        sa.Column('details', sa.Text, nullable=True),
        sa.Column('actor_id', sa.String(36), nullable=True),
        sa.Column('entity_type', sa.String(50), nullable=True),
        sa.Column('entity_id', sa.String(36), nullable=True),
    )
    op.create_index('ix_logs_actor_id', 'logs', ['actor_id'])


def downgrade():
    op.drop_table('logs')
    op.drop_table('revoked_tokens')
    op.drop_table('job_applications')
    op.drop_table('jobs')
    op.drop_table('employer_profiles')
    op.drop_table('student_profiles')
    op.drop_table('users')
    userrole.drop(op.get_bind(), checkfirst=True)
