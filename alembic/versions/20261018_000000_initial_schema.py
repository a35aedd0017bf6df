"""Initial schema for Mindful Heaven

Revision ID: 20261018_000000
Revises: None
Create Date: 2026-10-18 00:00:00.000000

This is the initial migration that creates all tables of the Mindful Heaven
service:
- Accounts and profiles (users, profiles, security_questions, password_reset_codes)
- AI chat sessions (ai_chats, ai_chat_messages)
- Community forum (forum_posts, forum_replies)
- Peer messaging (peer_chats, peer_messages, deleted_conversations)
- Mood journal and notifications (mood_logs, notifications)

Enum columns store member names, matching the SQLModel entities.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261018_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


MESSAGE_ROLE = sa.Enum("USER", "ASSISTANT", name="messagerole")
FORUM_CATEGORY = sa.Enum(
    "GENERAL", "STRESS", "ANXIETY", "DEPRESSION", "RELATIONSHIPS", "ACADEMICS", name="forumcategory"
)
MOOD = sa.Enum("GREAT", "GOOD", "OKAY", "LOW", "STRUGGLING", name="mood")
NOTIFICATION_TYPE = sa.Enum("FORUM", "MESSAGE", "SYSTEM", name="notificationtype")
REFERENCE_TYPE = sa.Enum("FORUM_POST", "PEER_CHAT", name="referencetype")


def _id() -> sa.Column:
    return sa.Column("id", sa.String(36), nullable=False)


def _user_fk(name: str = "user_id") -> sa.Column:
    return sa.Column(name, sa.String(36), sa.ForeignKey("users.id"), nullable=False)


def upgrade() -> None:
    """Create all tables."""

    # Accounts
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        _id(),
        _user_fk(),
        sa.Column("anonymous_alias", sa.String(100), nullable=False),
        sa.Column("avatar_url", sa.String(), nullable=True),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("notifications_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)

    op.create_table(
        "security_questions",
        _id(),
        _user_fk(),
        sa.Column("question1", sa.String(), nullable=False),
        sa.Column("question2", sa.String(), nullable=False),
        sa.Column("salt", sa.String(64), nullable=False),
        sa.Column("answer1_hash", sa.String(64), nullable=False),
        sa.Column("answer2_hash", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_security_questions_user_id", "security_questions", ["user_id"], unique=True)

    op.create_table(
        "password_reset_codes",
        _id(),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("code", sa.String(12), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("used", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_password_reset_codes_email", "password_reset_codes", ["email"])
    op.create_index("ix_password_reset_codes_used", "password_reset_codes", ["used"])
    op.create_index("ix_password_reset_codes_created_at", "password_reset_codes", ["created_at"])

    # AI chats
    op.create_table(
        "ai_chats",
        _id(),
        _user_fk(),
        sa.Column("title", sa.String(200), nullable=False, server_default="New Chat"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ai_chats_user_id", "ai_chats", ["user_id"])
    op.create_index("ix_ai_chats_updated_at", "ai_chats", ["updated_at"])

    op.create_table(
        "ai_chat_messages",
        _id(),
        sa.Column("chat_id", sa.String(36), sa.ForeignKey("ai_chats.id"), nullable=False),
        sa.Column("role", MESSAGE_ROLE, nullable=False),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ai_chat_messages_chat_id", "ai_chat_messages", ["chat_id"])
    op.create_index("ix_ai_chat_messages_created_at", "ai_chat_messages", ["created_at"])

    # Forum
    op.create_table(
        "forum_posts",
        _id(),
        _user_fk(),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("category", FORUM_CATEGORY, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_forum_posts_user_id", "forum_posts", ["user_id"])
    op.create_index("ix_forum_posts_created_at", "forum_posts", ["created_at"])

    op.create_table(
        "forum_replies",
        _id(),
        sa.Column("post_id", sa.String(36), sa.ForeignKey("forum_posts.id"), nullable=False),
        _user_fk(),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_forum_replies_post_id", "forum_replies", ["post_id"])
    op.create_index("ix_forum_replies_user_id", "forum_replies", ["user_id"])
    op.create_index("ix_forum_replies_created_at", "forum_replies", ["created_at"])

    # Peer messaging
    op.create_table(
        "peer_chats",
        _id(),
        _user_fk("participant1_id"),
        _user_fk("participant2_id"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_peer_chats_participant1_id", "peer_chats", ["participant1_id"])
    op.create_index("ix_peer_chats_participant2_id", "peer_chats", ["participant2_id"])
    op.create_index("ix_peer_chats_updated_at", "peer_chats", ["updated_at"])

    op.create_table(
        "peer_messages",
        _id(),
        sa.Column("chat_id", sa.String(36), sa.ForeignKey("peer_chats.id"), nullable=False),
        _user_fk("sender_id"),
        sa.Column("content", sa.String(), nullable=False, server_default=""),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("video_url", sa.String(), nullable=True),
        sa.Column("deleted_for_sender", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_for_everyone", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_peer_messages_chat_id", "peer_messages", ["chat_id"])
    op.create_index("ix_peer_messages_sender_id", "peer_messages", ["sender_id"])
    op.create_index("ix_peer_messages_created_at", "peer_messages", ["created_at"])

    op.create_table(
        "deleted_conversations",
        _id(),
        _user_fk(),
        sa.Column("chat_id", sa.String(36), sa.ForeignKey("peer_chats.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "chat_id", name="uq_deleted_conversations_user_chat"),
    )
    op.create_index("ix_deleted_conversations_user_id", "deleted_conversations", ["user_id"])
    op.create_index("ix_deleted_conversations_chat_id", "deleted_conversations", ["chat_id"])

    # Mood journal and notifications
    op.create_table(
        "mood_logs",
        _id(),
        _user_fk(),
        sa.Column("mood", MOOD, nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_mood_logs_user_id", "mood_logs", ["user_id"])
    op.create_index("ix_mood_logs_created_at", "mood_logs", ["created_at"])

    op.create_table(
        "notifications",
        _id(),
        _user_fk(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("type", NOTIFICATION_TYPE, nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reference_id", sa.String(36), nullable=True),
        sa.Column("reference_type", REFERENCE_TYPE, nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_read", "notifications", ["read"])
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])


def downgrade() -> None:
    """Drop all tables and enum types."""
    for table in (
        "notifications",
        "mood_logs",
        "deleted_conversations",
        "peer_messages",
        "peer_chats",
        "forum_replies",
        "forum_posts",
        "ai_chat_messages",
        "ai_chats",
        "password_reset_codes",
        "security_questions",
        "profiles",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum in (MESSAGE_ROLE, FORUM_CATEGORY, MOOD, NOTIFICATION_TYPE, REFERENCE_TYPE):
        enum.drop(bind, checkfirst=True)
