"""create_classification_tables

Revision ID: 3f2c9a1d7b41
Revises:
Create Date: 2026-10-18 09:12:05.118240

"""
from alembic import op
import sqlalchemy as sa

from docclass.types import JSONBCompat


revision = '3f2c9a1d7b41'
down_revision = None
branch_labels = None
depends_on = None

file_type_enum = sa.Enum('PDF', 'DOCX', 'TXT', name='filetype')
confidence_level_enum = sa.Enum('LOW', 'MEDIUM', 'HIGH', name='confidencelevel')


def upgrade() -> None:
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('color', sa.String(length=7), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_categories_id', 'categories', ['id'])
    op.create_index('ix_categories_name', 'categories', ['name'])

    op.create_table(
        'criteria',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('pattern', sa.String(), nullable=False),
        sa.Column('weight', sa.Numeric(precision=3, scale=2, asdecimal=False), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_criteria_id', 'criteria', ['id'])
    op.create_index('ix_criteria_category_id', 'criteria', ['category_id'])

    op.create_table(
        'documents',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('filename', sa.String(), nullable=False),
        sa.Column('file_type', file_type_enum, nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_documents_id', 'documents', ['id'])

    op.create_table(
        'classification_results',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('document_id', sa.Integer(), sa.ForeignKey('documents.id'), nullable=False),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column('confidence_level', confidence_level_enum, nullable=False),
        sa.Column('confidence_score', sa.Float(), nullable=False),
        sa.Column('classification_method', sa.String(), nullable=False),
        sa.Column('matched_criteria', JSONBCompat(), nullable=False),
        sa.Column('classified_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_classification_results_id', 'classification_results', ['id'])
    op.create_index('ix_classification_results_document_id', 'classification_results', ['document_id'])
    op.create_index('ix_classification_results_category_id', 'classification_results', ['category_id'])


def downgrade() -> None:
    op.drop_table('classification_results')
    op.drop_table('documents')
    op.drop_table('criteria')
    op.drop_table('categories')
    confidence_level_enum.drop(op.get_bind(), checkfirst=True)
    file_type_enum.drop(op.get_bind(), checkfirst=True)
