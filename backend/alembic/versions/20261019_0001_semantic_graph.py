"""semantic graph

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:01
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "semantic_entities",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("project_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("entity_type", sa.String(length=64), nullable=False),
        sa.Column("schema_type", sa.String(length=128), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("schema_properties", sa.JSON(), nullable=False),
        sa.Column("position_x", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("position_y", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("ordinal", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_semantic_entities_project_id", "semantic_entities", ["project_id"], unique=False)
    op.create_index(
        "ix_semantic_entities_project_ordinal",
        "semantic_entities",
        ["project_id", "ordinal"],
        unique=False,
    )

    op.create_table(
        "semantic_relations",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("project_id", sa.String(length=64), nullable=False),
        sa.Column("subject_id", sa.String(length=36), nullable=False),
        sa.Column("predicate", sa.String(length=255), nullable=False),
        sa.Column("object_id", sa.String(length=36), nullable=False),
        sa.Column("confidence", sa.Float(), nullable=True),
        sa.Column("ordinal", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["subject_id"], ["semantic_entities.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["object_id"], ["semantic_entities.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_semantic_relations_project_id", "semantic_relations", ["project_id"], unique=False)
    op.create_index("ix_semantic_relations_subject_id", "semantic_relations", ["subject_id"], unique=False)
    op.create_index("ix_semantic_relations_object_id", "semantic_relations", ["object_id"], unique=False)
    op.create_index(
        "ix_semantic_relations_project_ordinal",
        "semantic_relations",
        ["project_id", "ordinal"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_semantic_relations_project_ordinal", table_name="semantic_relations")
    op.drop_index("ix_semantic_relations_object_id", table_name="semantic_relations")
    op.drop_index("ix_semantic_relations_subject_id", table_name="semantic_relations")
    op.drop_index("ix_semantic_relations_project_id", table_name="semantic_relations")
    op.drop_table("semantic_relations")
    op.drop_index("ix_semantic_entities_project_ordinal", table_name="semantic_entities")
    op.drop_index("ix_semantic_entities_project_id", table_name="semantic_entities")
    op.drop_table("semantic_entities")
