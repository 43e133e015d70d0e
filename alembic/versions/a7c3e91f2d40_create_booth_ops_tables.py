"""create_booth_ops_tables

Revision ID: a7c3e91f2d40
Revises:
Create Date: 2025-11-12 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a7c3e91f2d40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('grade', sa.Integer(), nullable=False),
        sa.Column('class_no', sa.Integer(), nullable=False),
        sa.Column('student_no', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('grade', 'class_no', 'student_no', name='uq_student_identity'),
    )
    op.create_index('idx_students_class', 'students', ['grade', 'class_no'])

    op.create_table(
        'booths',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('class_name', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('location', sa.String(length=100), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booths_class_name'), 'booths', ['class_name'], unique=True)

    op.create_table(
        'booth_admins',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('class_name', sa.String(length=50), nullable=False),
        sa.Column('password', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_booth_admins_class_name'), 'booth_admins', ['class_name'], unique=True)

    op.create_table(
        'booth_usages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booth_id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('admin_id', sa.Integer(), nullable=True),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['booth_id'], ['booths.id']),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.ForeignKeyConstraint(['admin_id'], ['booth_admins.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_booth_usages_booth_student', 'booth_usages', ['booth_id', 'student_id'])
    op.create_index('idx_booth_usages_used_at', 'booth_usages', ['used_at'])

    # Voided usages are copied here before the usage row is deleted
    op.create_table(
        'booth_usages_void',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booth_usage_id', sa.Integer(), nullable=False),
        sa.Column('booth_id', sa.Integer(), nullable=True),
        sa.Column('student_id', sa.Integer(), nullable=True),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('void_by_admin_id', sa.Integer(), nullable=True),
        sa.Column('void_reason', sa.String(length=200), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_booth_usages_void_usage', 'booth_usages_void', ['booth_usage_id'])


def downgrade():
    op.drop_index('idx_booth_usages_void_usage', table_name='booth_usages_void')
    op.drop_table('booth_usages_void')
    op.drop_index('idx_booth_usages_used_at', table_name='booth_usages')
    op.drop_index('idx_booth_usages_booth_student', table_name='booth_usages')
    op.drop_table('booth_usages')
    op.drop_index(op.f('ix_booth_admins_class_name'), table_name='booth_admins')
    op.drop_table('booth_admins')
    op.drop_index(op.f('ix_booths_class_name'), table_name='booths')
    op.drop_table('booths')
    op.drop_index('idx_students_class', table_name='students')
    op.drop_table('students')
