"""Conversation turn handling on top of the generation client."""

from typing import AsyncGenerator

from hayat_ai.models import ConversationSession, Turn
from hayat_ai.services.gemini_client import GenerationClient
from hayat_ai.utils.exceptions import BackendCallError

APOLOGY = "Sorry, I encountered an error. Please try again."


async def stream_reply(
    client: GenerationClient,
    session: ConversationSession,
    text: str
) -> AsyncGenerator[Turn, None]:
    """
    Send a user message and grow the model turn as fragments arrive.

    The user turn and an empty model turn are appended to the session before
    the first fragment. On a backend failure the partial reply is replaced with
    the apology text before the error propagates.

    Yields:
        The model turn after each fragment

    Raises:
        RequestValidationError: Empty message (session left unchanged)
        BackendCallError: Streaming failed
    """
    fragments = client.send_turn(session, text)

    session.add_turn("user", text)
    reply = session.add_turn("model")

    try:
        async for fragment in fragments:
            reply.text += fragment
            yield reply
    except BackendCallError:
        reply.text = APOLOGY
        raise
