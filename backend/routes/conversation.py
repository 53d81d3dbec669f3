"""Conversation endpoints: submit input, render the log, clear the session."""

import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from career_quest.conversation import Conversation
from career_quest.errors import GenerationError, ValidationError

from .models import ConversationOut, SendBody

logger = logging.getLogger(__name__)

router = APIRouter()

SESSION_COOKIE = "career_session"
GENERATION_FAILED = "Could not generate a response. Please try again."


def get_conversation(request: Request) -> Conversation:
    return request.app.state.conversation


def session_id(request: Request, response: Response) -> str:
    """Read the session cookie, issuing a new one on first contact."""
    sid = request.cookies.get(SESSION_COOKIE)
    if not sid:
        sid = secrets.token_urlsafe(16)
        response.set_cookie(SESSION_COOKIE, sid, httponly=True, samesite="lax")
    return sid


@router.post("/send")
async def send(
    body: SendBody,
    sid: str = Depends(session_id),
    conversation: Conversation = Depends(get_conversation),
):
    """Store the user's message as the pending input for the next render."""
    try:
        await conversation.submit_input(sid, body.message)
    except ValidationError as e:
        raise HTTPException(400, str(e))
    return {"ok": True}


@router.get("/conversation", response_model=ConversationOut)
async def render(
    sid: str = Depends(session_id),
    conversation: Conversation = Depends(get_conversation),
):
    """Run the pending turn, if any, and return the conversation log."""
    try:
        view = await conversation.render_current(sid)
    except GenerationError:
        logger.exception("Turn failed for session %s", sid)
        raise HTTPException(502, GENERATION_FAILED)
    return ConversationOut(stage=view.stage, log=view.log)


@router.post("/clear")
async def clear(
    sid: str = Depends(session_id),
    conversation: Conversation = Depends(get_conversation),
):
    """Reset the conversation to its initial state."""
    await conversation.reset_session(sid)
    return {"ok": True}
