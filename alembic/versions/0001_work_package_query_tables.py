# File: /alembic/versions/0001_work_package_query_tables.py | Version: 1.0 | Title: Work packages, lookup tables and saved queries
"""work package query tables"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_wp_query_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "statuses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_closed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("position", sa.Integer(), nullable=True),
    )
    op.create_table(
        "types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("is_milestone", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "enumerations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(50), nullable=False, server_default="IssuePriority"),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_table(
        "work_packages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("type_id", sa.Integer(), sa.ForeignKey("types.id"), nullable=False),
        sa.Column("status_id", sa.Integer(), sa.ForeignKey("statuses.id"), nullable=False),
        sa.Column("priority_id", sa.Integer(), sa.ForeignKey("enumerations.id"), nullable=True),
        sa.Column("author_id", sa.Integer(), nullable=True),
        sa.Column("assigned_to_id", sa.Integer(), nullable=True),
        sa.Column("responsible_id", sa.Integer(), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("version_id", sa.Integer(), nullable=True),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("work_packages.id"), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("done_ratio", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("lock_version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("story_points", sa.Integer(), nullable=True),
        sa.Column("remaining_hours", sa.Float(), nullable=True),
        sa.Column("schedule_manually", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("duration", sa.Integer(), nullable=True),
    )
    op.create_index("ix_work_packages_project_id", "work_packages", ["project_id"])
    op.create_index("ix_work_packages_status", "work_packages", ["status_id"])
    op.create_index("ix_work_packages_assigned_to", "work_packages", ["assigned_to_id"])
    op.create_index("ix_work_packages_updated_at", "work_packages", ["updated_at"])

    op.create_table(
        "queries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=True),
        sa.Column("visibility", sa.String(20), nullable=False, server_default="private"),
        sa.Column("starred", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("display", sa.String(30), nullable=False, server_default="list"),
        sa.Column("filters", sa.JSON(), nullable=True),
        sa.Column("sort_criteria", sa.JSON(), nullable=True),
        sa.Column("column_names", sa.JSON(), nullable=True),
        sa.Column("group_by", sa.String(100), nullable=True),
        sa.Column("group_collapsed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("highlighting_mode", sa.String(20), nullable=False, server_default="none"),
        sa.Column("highlighted_attributes", sa.JSON(), nullable=True),
        sa.Column("timeline_zoom_level", sa.String(20), nullable=False, server_default="weeks"),
        sa.Column("show_timeline", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("include_subprojects", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_hierarchies", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_sums", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_queries_user", "queries", ["user_id"])
    op.create_index("ix_queries_project", "queries", ["project_id"])


def downgrade():
    op.drop_index("ix_queries_project", table_name="queries")
    op.drop_index("ix_queries_user", table_name="queries")
    op.drop_table("queries")
    op.drop_index("ix_work_packages_updated_at", table_name="work_packages")
    op.drop_index("ix_work_packages_assigned_to", table_name="work_packages")
    op.drop_index("ix_work_packages_status", table_name="work_packages")
    op.drop_index("ix_work_packages_project_id", table_name="work_packages")
    op.drop_table("work_packages")
    op.drop_table("enumerations")
    op.drop_table("types")
    op.drop_table("statuses")
