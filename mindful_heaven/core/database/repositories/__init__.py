"""
Repository layer.

One repository per business domain, each built on ``AsyncBaseRepository``
and bound to an ``AsyncSession`` for the duration of a request.
"""

from .ai_chats import ChatSessionRepository
from .base import AsyncBaseRepository, QueryBuilder
from .forum import ForumRepository
from .mood_logs import MoodLogRepository
from .notifications import NotificationRepository
from .password_reset_codes import PasswordResetCodeRepository
from .peer_chats import PeerChatRepository
from .profiles import ProfileRepository
from .security_questions import SecurityQuestionRepository
from .users import UserRepository

__all__ = [
    "AsyncBaseRepository",
    "ChatSessionRepository",
    "ForumRepository",
    "MoodLogRepository",
    "NotificationRepository",
    "PasswordResetCodeRepository",
    "PeerChatRepository",
    "ProfileRepository",
    "QueryBuilder",
    "SecurityQuestionRepository",
    "UserRepository",
]
