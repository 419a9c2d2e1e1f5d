"""tournament_core_schema

Revision ID: 5b1e2c3d4f60
Revises:
Create Date: 2026-10-16 09:00:00.000000
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "5b1e2c3d4f60"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(32), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("total_quizzes", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_score", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("average_score", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("badges", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("total_quizzes >= 0", name="ck_users_total_quizzes_non_negative"),
        sa.CheckConstraint("total_score >= 0", name="ck_users_total_score_non_negative"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )
    op.create_index("idx_users_average_score", "users", ["average_score", "total_score"])

    op.create_table(
        "quizzes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=False, server_default=sa.text("''")),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("difficulty", sa.String(8), nullable=False),
        sa.Column("created_by", sa.BigInteger(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("time_limit_seconds", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_attempts", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("average_score", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("difficulty IN ('easy','medium','hard')", name="ck_quizzes_difficulty"),
        sa.CheckConstraint("time_limit_seconds >= 0", name="ck_quizzes_time_limit_non_negative"),
        sa.CheckConstraint("total_attempts >= 0", name="ck_quizzes_total_attempts_non_negative"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
    )
    op.create_index("idx_quizzes_created_by", "quizzes", ["created_by"])
    op.create_index("idx_quizzes_public_created_at", "quizzes", ["is_public", "created_at"])

    op.create_table(
        "quiz_questions",
        sa.Column("quiz_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("correct_option", sa.Integer(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("time_limit_seconds", sa.Integer(), nullable=False),
        sa.Column("difficulty", sa.String(8), nullable=False),
        sa.CheckConstraint("position >= 0", name="ck_quiz_questions_position_non_negative"),
        sa.CheckConstraint("correct_option >= 0", name="ck_quiz_questions_correct_option_non_negative"),
        sa.CheckConstraint("points > 0", name="ck_quiz_questions_points_positive"),
        sa.CheckConstraint("time_limit_seconds > 0", name="ck_quiz_questions_time_limit_positive"),
        sa.CheckConstraint("difficulty IN ('easy','medium','hard')", name="ck_quiz_questions_difficulty"),
        sa.ForeignKeyConstraint(["quiz_id"], ["quizzes.id"]),
        sa.PrimaryKeyConstraint("quiz_id", "position"),
    )

    op.create_table(
        "quiz_attempts",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("quiz_id", sa.Uuid(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("max_score", sa.Integer(), nullable=False),
        sa.Column("percentage", sa.Float(), nullable=False),
        sa.Column("attempted_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("score >= 0", name="ck_quiz_attempts_score_non_negative"),
        sa.CheckConstraint("max_score >= score", name="ck_quiz_attempts_score_within_max"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["quiz_id"], ["quizzes.id"]),
    )
    op.create_index("idx_quiz_attempts_user_attempted", "quiz_attempts", ["user_id", "attempted_at"])
    op.create_index("idx_quiz_attempts_quiz", "quiz_attempts", ["quiz_id"])

    op.create_table(
        "tournaments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(128), nullable=False),
        sa.Column("description", sa.String(1000), nullable=False, server_default=sa.text("''")),
        sa.Column("quiz_id", sa.Uuid(), nullable=False),
        sa.Column("created_by", sa.BigInteger(), nullable=False),
        sa.Column("max_participants", sa.Integer(), nullable=False),
        sa.Column("participants_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("is_private", sa.Boolean(), nullable=False),
        sa.Column("invite_code", sa.String(32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('upcoming','active','completed','cancelled')",
            name="ck_tournaments_status",
        ),
        sa.CheckConstraint("max_participants >= 1", name="ck_tournaments_max_participants_positive"),
        sa.CheckConstraint(
            "participants_count >= 0 AND participants_count <= max_participants",
            name="ck_tournaments_participants_within_capacity",
        ),
        sa.CheckConstraint("end_time > start_time", name="ck_tournaments_time_window"),
        sa.ForeignKeyConstraint(["quiz_id"], ["quizzes.id"]),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.UniqueConstraint("invite_code", name="uq_tournaments_invite_code"),
    )
    op.create_index("idx_tournaments_status_start_time", "tournaments", ["status", "start_time"])
    op.create_index("idx_tournaments_created_by", "tournaments", ["created_by"])

    op.create_table(
        "tournament_prizes",
        sa.Column("tournament_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(256), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.CheckConstraint("position >= 1", name="ck_tournament_prizes_position_positive"),
        sa.CheckConstraint("points >= 0", name="ck_tournament_prizes_points_non_negative"),
        sa.ForeignKeyConstraint(["tournament_id"], ["tournaments.id"]),
        sa.PrimaryKeyConstraint("tournament_id", "position"),
    )

    op.create_table(
        "tournament_participants",
        sa.Column("tournament_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.CheckConstraint("score >= 0", name="ck_tournament_participants_score_non_negative"),
        sa.ForeignKeyConstraint(["tournament_id"], ["tournaments.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("tournament_id", "user_id"),
    )
    op.create_index(
        "idx_tournament_participants_tournament_score",
        "tournament_participants",
        ["tournament_id", "score", "completed_at"],
    )


def downgrade() -> None:
    op.drop_index(
        "idx_tournament_participants_tournament_score",
        table_name="tournament_participants",
    )
    op.drop_table("tournament_participants")
    op.drop_table("tournament_prizes")
    op.drop_index("idx_tournaments_created_by", table_name="tournaments")
    op.drop_index("idx_tournaments_status_start_time", table_name="tournaments")
    op.drop_table("tournaments")
    op.drop_index("idx_quiz_attempts_quiz", table_name="quiz_attempts")
    op.drop_index("idx_quiz_attempts_user_attempted", table_name="quiz_attempts")
    op.drop_table("quiz_attempts")
    op.drop_table("quiz_questions")
    op.drop_index("idx_quizzes_public_created_at", table_name="quizzes")
    op.drop_index("idx_quizzes_created_by", table_name="quizzes")
    op.drop_table("quizzes")
    op.drop_index("idx_users_average_score", table_name="users")
    op.drop_table("users")
