"""create projects, sprints and tasks tables

Revision ID: 4a1c2e9b7d10
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "4a1c2e9b7d10"
down_revision = None
branch_labels = None
depends_on = None


PROJECT_STATUS = sa.Enum("ACTIVE", "ON_HOLD", "COMPLETED", "CANCELLED", name="projectstatus")
SPRINT_STATUS = sa.Enum("PENDING", "IN_PROGRESS", "DONE", name="sprintstatus")
TASK_STATUS = sa.Enum("TODO", "IN_PROGRESS", "BLOCKED", "COMPLETED", name="taskstatus")


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("actual_expected_end_date", sa.Date(), nullable=True),
        sa.Column("status", PROJECT_STATUS, nullable=False),
        sa.Column("health", sa.String(length=16), nullable=True),
        sa.Column("priority", sa.String(length=16), nullable=True),
    )

    op.create_table(
        "sprints",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "project_id",
            sa.String(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("expect_date", sa.Date(), nullable=True),
        sa.Column("expect_end_date", sa.Date(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", SPRINT_STATUS, nullable=False),
    )
    op.create_index("idx_sprints_project_id", "sprints", ["project_id"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "project_id",
            sa.String(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "sprint_id",
            sa.String(),
            sa.ForeignKey("sprints.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("status", TASK_STATUS, nullable=False),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("actual_hours", sa.Float(), nullable=True),
        sa.Column("assignee", sa.String(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_backlog", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("idx_tasks_project_id", "tasks", ["project_id"])
    op.create_index("idx_tasks_sprint_id", "tasks", ["sprint_id"])


def downgrade() -> None:
    op.drop_index("idx_tasks_sprint_id", table_name="tasks")
    op.drop_index("idx_tasks_project_id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("idx_sprints_project_id", table_name="sprints")
    op.drop_table("sprints")
    op.drop_table("projects")
