"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- auth: Signup, login and token models
- profiles: Profile models
- ai_chats: Chat session, chat message and completion relay models
- forum: Forum post and reply models
- peer_chats: Peer chat and message models
- mood_logs: Mood journal models
- notifications: Notification models
- security: Security question and password reset models
- storage: Upload result model
"""

from .ai_chats import (
    ChatHistoryRead,
    ChatMessageCreate,
    ChatMessageRead,
    ChatSessionCreate,
    ChatSessionRead,
    ChatSessionUpdate,
    RelayCompletion,
    RelayMessage,
    RelayRequest,
)
from .auth import ChangePasswordRequest, CurrentUserRead, LoginRequest, SignupRequest, TokenResponse
from .forum import ForumPostCreate, ForumPostRead, ForumReplyCreate, ForumReplyRead
from .mood_logs import MoodLogCreate, MoodLogRead
from .notifications import MarkedRead, NotificationRead, UnreadCount
from .peer_chats import HideResult, PeerChatRead, PeerChatStart, PeerMessageCreate, PeerMessageRead
from .profiles import ProfileRead, ProfileUpdate, PublicProfileRead
from .security import (
    CodeResetRequest,
    SecurityQuestionCatalogue,
    SecurityQuestionsRead,
    SecurityQuestionsSave,
    SecurityResetRequest,
)
from .storage import UploadResult

__all__ = [
    "ChangePasswordRequest",
    "ChatHistoryRead",
    "ChatMessageCreate",
    "ChatMessageRead",
    "ChatSessionCreate",
    "ChatSessionRead",
    "ChatSessionUpdate",
    "CodeResetRequest",
    "CurrentUserRead",
    "ForumPostCreate",
    "ForumPostRead",
    "ForumReplyCreate",
    "ForumReplyRead",
    "HideResult",
    "LoginRequest",
    "MarkedRead",
    "MoodLogCreate",
    "MoodLogRead",
    "NotificationRead",
    "PeerChatRead",
    "PeerChatStart",
    "PeerMessageCreate",
    "PeerMessageRead",
    "ProfileRead",
    "ProfileUpdate",
    "PublicProfileRead",
    "RelayCompletion",
    "RelayMessage",
    "RelayRequest",
    "SecurityQuestionCatalogue",
    "SecurityQuestionsRead",
    "SecurityQuestionsSave",
    "SecurityResetRequest",
    "SignupRequest",
    "TokenResponse",
    "UnreadCount",
    "UploadResult",
]
