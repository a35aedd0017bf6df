"""
Chat-completion relay endpoint.

Requires a signed-in user. Streams the upstream event stream back
unchanged, or answers with the whole completion when ``stream`` is false. Upstream failures are rendered as
``{"error": ...}`` with status 429, 402 or 500.
"""

from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.core.models.io import RelayCompletion, RelayRequest
from mindful_heaven.server.services.deps import CompletionRelayDep, CurrentUserDep

logger = get_logger(__name__)

router = APIRouter(tags=["ai-chat"])


@router.post(
    "",
    summary="Relay Chat Completion",
    description="Forward a conversation to the support assistant. With `stream` (default) the response is "
    "the upstream `text/event-stream` body, byte for byte; otherwise a JSON object with the completion.",
    response_description="Event stream of completion chunks, or the completion text.",
    responses={
        200: {
            "description": "Completion stream or completion",
            "content": {"text/event-stream": {}, "application/json": {}},
        },
        400: {"description": "No messages, or a message with an unsupported role"},
        401: {"description": "Not signed in"},
        402: {"description": "Payment required, please add funds."},
        429: {"description": "Rate limits exceeded, please try again later."},
        500: {"description": "AI service temporarily unavailable"},
    },
)
async def relay_chat_completion(payload: RelayRequest, relay: CompletionRelayDep, user: CurrentUserDep):
    """
    Relay a chat completion.

    - **messages**: Conversation so far, as ``{role, content}`` with role ``user`` or ``assistant``.
    - **stream**: Stream the answer (default ``true``).
    """
    logger.debug(f"Completion relay for user_id={user.id}: {len(payload.messages)} messages, stream={payload.stream}")
    if not payload.stream:
        content = await relay.complete(payload.messages)
        return RelayCompletion(content=content)

    upstream = await relay.open_stream(payload.messages)
    return StreamingResponse(
        upstream.iter_bytes(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
        background=BackgroundTask(upstream.aclose),
    )
