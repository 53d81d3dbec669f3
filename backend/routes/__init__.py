"""FastAPI API endpoints under /api.

Endpoint groups: conversation (send, render, clear) and settings (health,
public settings). The conversation endpoints key every call by the
`career_session` cookie, issued on first contact.
"""

from fastapi import APIRouter

from .conversation import router as conversation_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(conversation_router)
