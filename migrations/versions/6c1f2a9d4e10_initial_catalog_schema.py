"""initial catalog schema

Revision ID: 6c1f2a9d4e10
Revises:
Create Date: 2025-11-06 09:12:41.318204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "6c1f2a9d4e10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, ideas, comments and project links."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("display_name", sa.String(length=100), nullable=True),
        sa.Column("bio", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "ideas",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("difficulty", sa.String(length=20), nullable=False),
        sa.Column("tools", sa.JSON(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("monetization_potential", sa.Text(), nullable=True),
        sa.Column("estimated_build_time", sa.String(length=50), nullable=True),
        sa.Column("build_guide", sa.Text(), nullable=True),
        sa.Column("free_tier", sa.Boolean(), nullable=False),
        sa.Column("is_teaser", sa.Boolean(), nullable=False),
        sa.Column("view_count", sa.Integer(), nullable=False),
        sa.Column("comment_count", sa.Integer(), nullable=False),
        sa.Column("project_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("length(trim(title)) > 0", name="ck_ideas_title_not_empty"),
        sa.CheckConstraint(
            "length(trim(description)) > 0",
            name="ck_ideas_description_not_empty",
        ),
        sa.CheckConstraint("view_count >= 0", name="ck_ideas_view_count_positive"),
        sa.CheckConstraint("comment_count >= 0", name="ck_ideas_comment_count_positive"),
        sa.CheckConstraint("project_count >= 0", name="ck_ideas_project_count_positive"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ideas_category", "ideas", ["category"])
    op.create_index("ix_ideas_free_tier", "ideas", ["free_tier"])
    op.create_index("ix_ideas_created_at", "ideas", ["created_at"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("idea_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("parent_comment_id", sa.Uuid(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("flagged_for_moderation", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("id <> parent_comment_id", name="ck_comments_no_self_reference"),
        sa.CheckConstraint("length(trim(content)) > 0", name="ck_comments_content_not_empty"),
        sa.ForeignKeyConstraint(["idea_id"], ["ideas.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["parent_comment_id", "idea_id"],
            ["comments.id", "comments.idea_id"],
            ondelete="CASCADE",
            name="fk_comments_parent_same_idea",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("id", "idea_id", name="uq_comments_id_idea"),
    )
    op.create_index("ix_comments_idea_created", "comments", ["idea_id", "created_at"])
    op.create_index("ix_comments_parent", "comments", ["parent_comment_id"])

    op.create_table(
        "project_links",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("idea_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("url", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("tools_used", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("length(trim(title)) > 0", name="ck_project_links_title_not_empty"),
        sa.CheckConstraint("length(trim(url)) > 0", name="ck_project_links_url_not_empty"),
        sa.ForeignKeyConstraint(["idea_id"], ["ideas.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_project_links_idea_created",
        "project_links",
        ["idea_id", "created_at"],
    )
    op.create_index("ix_project_links_user", "project_links", ["user_id"])


def downgrade() -> None:
    """Drop every catalog table."""
    op.drop_index("ix_project_links_user", table_name="project_links")
    op.drop_index("ix_project_links_idea_created", table_name="project_links")
    op.drop_table("project_links")
    op.drop_index("ix_comments_parent", table_name="comments")
    op.drop_index("ix_comments_idea_created", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_ideas_created_at", table_name="ideas")
    op.drop_index("ix_ideas_free_tier", table_name="ideas")
    op.drop_index("ix_ideas_category", table_name="ideas")
    op.drop_table("ideas")
    op.drop_table("users")
