"""
Database entity models.

This package contains all database entity models organized by business domain.
Each module represents either a single table or a domain spanning a few
related tables.

Modules:
- users: Account credentials
- profiles: Anonymous public profiles
- ai_chats: AI chat sessions and their messages
- forum: Forum posts and replies
- peer_chats: Peer chats, peer messages, hidden conversations
- mood_logs: Mood journal entries
- notifications: In-app notifications
- security_questions: Security question pairs with hashed answers
- password_reset_codes: One-time reset codes
"""

from . import (
    ai_chats,
    forum,
    mood_logs,
    notifications,
    password_reset_codes,
    peer_chats,
    profiles,
    security_questions,
    users,
)

__all__ = [
    "ai_chats",
    "forum",
    "mood_logs",
    "notifications",
    "password_reset_codes",
    "peer_chats",
    "profiles",
    "security_questions",
    "users",
]
