"""SQLAlchemy table definitions for the forum.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()


def _timestamps() -> list[Column]:
    return [
        Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
        Column(
            "updated_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
        Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    ]


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(20), nullable=False, unique=True),
    Column("email", String(320), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False, server_default=""),
    Column("avatar_url", Text, nullable=True),
    Column("headline", String(40), nullable=True),
    Column("bio", Text, nullable=True),
    Column("follower_count", Integer, nullable=False, server_default="0"),
    Column("following_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("disabled_at", TIMESTAMP(timezone=True), nullable=True),
)

# ============================================================================
# QUESTIONS TABLE
# ============================================================================
questions_table = Table(
    "questions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(80), nullable=False),
    Column("content_markdown", Text, nullable=False, server_default=""),
    Column("content_rendered", Text, nullable=False, server_default=""),
    Column("answer_count", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("follower_count", Integer, nullable=False, server_default="0"),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    *_timestamps(),
)

Index("idx_questions_user_id", questions_table.c.user_id)

# ============================================================================
# ANSWERS TABLE
# ============================================================================
answers_table = Table(
    "answers",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "question_id",
        UUID,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("content_markdown", Text, nullable=False, server_default=""),
    Column("content_rendered", Text, nullable=False, server_default=""),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    *_timestamps(),
)

Index("idx_answers_question_id", answers_table.c.question_id)
Index("idx_answers_user_id", answers_table.c.user_id)

# ============================================================================
# ARTICLES TABLE
# ============================================================================
articles_table = Table(
    "articles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(80), nullable=False),
    Column("content_markdown", Text, nullable=False, server_default=""),
    Column("content_rendered", Text, nullable=False, server_default=""),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("follower_count", Integer, nullable=False, server_default="0"),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    *_timestamps(),
)

Index("idx_articles_user_id", articles_table.c.user_id)

# ============================================================================
# COMMENTS TABLE (polymorphic: question, answer or article)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("commentable_type", String(20), nullable=False),
    Column("commentable_id", UUID, nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("content", Text, nullable=False),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    *_timestamps(),
)

Index(
    "idx_comments_commentable",
    comments_table.c.commentable_type,
    comments_table.c.commentable_id,
)

# ============================================================================
# VOTES TABLE (the vote ledger)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "votable_type",
        postgresql.ENUM(
            "question",
            "answer",
            "article",
            "comment",
            name="votable_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("votable_id", UUID, nullable=False),
    Column(
        "type",
        postgresql.ENUM("up", "down", name="vote_type", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
)

# Voter listings filter by target and sort by vote time
Index(
    "idx_votes_votable_created_at",
    votes_table.c.votable_type,
    votes_table.c.votable_id,
    votes_table.c.created_at.desc(),
)

# ============================================================================
# FOLLOWS TABLE
# ============================================================================
follows_table = Table(
    "follows",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "followable_type",
        postgresql.ENUM(
            "user",
            "question",
            "article",
            "topic",
            name="followable_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("followable_id", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint(
        "user_id", "followable_type", "followable_id", name="unique_follow"
    ),
)

Index(
    "idx_follows_followable",
    follows_table.c.followable_type,
    follows_table.c.followable_id,
)
