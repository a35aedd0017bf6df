"""
Python client for a Mindful Heaven server.

- ``sse``: incremental decoder for the completion relay's event stream.
- ``chat``: AI chat client that streams answers into a transcript.
- ``password_reset``: the security-question password reset state machine.
"""

from .chat import AIChatClient, RelayError, TranscriptEntry
from .password_reset import ResetStep, SecurityResetFlow
from .sse import SSEDecoder, decode_stream

__all__ = [
    "AIChatClient",
    "RelayError",
    "ResetStep",
    "SSEDecoder",
    "SecurityResetFlow",
    "TranscriptEntry",
    "decode_stream",
]
