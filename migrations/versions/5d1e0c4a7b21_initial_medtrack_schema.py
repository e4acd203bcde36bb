"""initial medtrack schema

Revision ID: 5d1e0c4a7b21
Revises:
Create Date: 2026-10-19 10:12:44.501317
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5d1e0c4a7b21'
down_revision = None
branch_labels = None
depends_on = None

ROLES = ('patient', 'caretaker')
FREQUENCIES = ('daily', 'twice_daily', 'weekly', 'monthly', 'as_needed')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=80), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum(*ROLES, name='user_role'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'medications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('dosage', sa.String(length=60), nullable=False),
        sa.Column('frequency', sa.Enum(*FREQUENCIES, name='medication_frequency'), nullable=False),
        sa.Column('time_of_day', sa.Time(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_medications_user_id', 'medications', ['user_id'])
    op.create_index('ix_medications_created_at', 'medications', ['created_at'])

    op.create_table(
        'medication_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('taken_at', sa.DateTime(), nullable=False),
        sa.Column('taken_on', sa.Date(), nullable=False),          # server-local calendar day
        sa.Column('proof_image', sa.String(length=512), nullable=True),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('medication_id', 'taken_on', name='uq_medication_logs_medication_day'),
    )
    op.create_index('ix_medication_logs_medication_id', 'medication_logs', ['medication_id'])
    op.create_index('ix_medication_logs_user_id', 'medication_logs', ['user_id'])
    op.create_index('ix_medication_logs_user_day', 'medication_logs', ['user_id', 'taken_on'])

    op.create_table(
        'caretaker_patient',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('caretaker_id', sa.Integer(), nullable=False),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['caretaker_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['patient_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('caretaker_id', 'patient_id', name='uq_caretaker_patient_pair'),
    )
    op.create_index('ix_caretaker_patient_caretaker_id', 'caretaker_patient', ['caretaker_id'])
    op.create_index('ix_caretaker_patient_patient_id', 'caretaker_patient', ['patient_id'])


def downgrade():
    op.drop_table('caretaker_patient')
    op.drop_table('medication_logs')
    op.drop_table('medications')
    op.drop_table('users')
    sa.Enum(name='medication_frequency').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
