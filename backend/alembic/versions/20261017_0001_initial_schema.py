"""initial template tag schema

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17 00:00:01
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261017_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "templates",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("file_path", sa.String(length=1024), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("metadata_json", sa.JSON(), nullable=False),
        sa.Column("uploaded_by", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_templates_status", "templates", ["status"], unique=False)

    op.create_table(
        "extracted_tags",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("template_id", sa.String(length=36), nullable=False),
        sa.Column("text", sa.String(length=512), nullable=False),
        sa.Column("tag_content", sa.String(length=512), nullable=False),
        sa.Column("start_delimiter", sa.String(length=64), nullable=False),
        sa.Column("end_delimiter", sa.String(length=64), nullable=False),
        sa.Column("pattern", sa.String(length=255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("context", sa.Text(), nullable=False),
        sa.Column("confidence", sa.Integer(), nullable=False),
        sa.Column("extracted_by", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["template_id"], ["templates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_extracted_tags_template_id", "extracted_tags", ["template_id"], unique=False)

    op.create_table(
        "tag_extraction_runs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("template_id", sa.String(length=36), nullable=False),
        sa.Column("content_source", sa.String(length=32), nullable=False),
        sa.Column("content_length", sa.Integer(), nullable=False),
        sa.Column("config_json", sa.JSON(), nullable=False),
        sa.Column("tag_count", sa.Integer(), nullable=False),
        sa.Column("extracted_by", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["template_id"], ["templates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tag_extraction_runs_template_id", "tag_extraction_runs", ["template_id"], unique=False)

    op.create_table(
        "tag_mappings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("template_id", sa.String(length=36), nullable=False),
        sa.Column("tag_text", sa.String(length=512), nullable=False),
        sa.Column("field_name", sa.String(length=255), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("mapped_by", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["template_id"], ["templates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("template_id", "tag_text", name="uq_tag_mappings_template_tag"),
    )
    op.create_index("ix_tag_mappings_template_id", "tag_mappings", ["template_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_tag_mappings_template_id", table_name="tag_mappings")
    op.drop_table("tag_mappings")
    op.drop_index("ix_tag_extraction_runs_template_id", table_name="tag_extraction_runs")
    op.drop_table("tag_extraction_runs")
    op.drop_index("ix_extracted_tags_template_id", table_name="extracted_tags")
    op.drop_table("extracted_tags")
    op.drop_index("ix_templates_status", table_name="templates")
    op.drop_table("templates")
