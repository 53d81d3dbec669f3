import logging
import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from backend.config import Settings, configure_logging, load_settings
from backend.routes import router
from career_quest.content import ContentClient
from career_quest.conversation import Conversation
from career_quest.images import HttpImageGenerator, PlaceholderImageGenerator
from career_quest.llm import CannedLLM, HttpLLM
from career_quest.session import SessionRegistry

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).parent.parent / "public"


def build_conversation(settings: Settings) -> Conversation:
    """Wire the collaborator clients described by `settings` into a Conversation."""
    if settings.offline:
        logger.warning("API_KEY is not set, using canned content and placeholder images")
        llm = CannedLLM()
        images = PlaceholderImageGenerator()
    else:
        llm = HttpLLM(
            settings.content_url,
            api_key=settings.api_key,
            model=settings.model_id,
            randomness=settings.randomness,
            timeout=settings.http_timeout,
        )
        images = HttpImageGenerator(
            settings.image_url,
            api_key=settings.api_key,
            style=settings.image_style,
            orientation=settings.image_orientation,
            timeout=settings.http_timeout,
        )
    return Conversation(
        content=ContentClient(llm, counselor=settings.counselor_name),
        images=images,
        registry=SessionRegistry(idle_timeout=settings.session_idle_timeout),
    )


def create_app(
    settings: Settings | None = None,
    conversation: Conversation | None = None,
) -> FastAPI:
    resolved = settings or load_settings()
    configure_logging(resolved.log_level)

    app = FastAPI(title="Career Quest")
    app.state.settings = resolved
    app.state.conversation = conversation or build_conversation(resolved)
    app.include_router(router, prefix="/api")

    if PUBLIC_DIR.exists() and not os.getenv("NO_STATIC", ""):
        # Presentation layer: static front-end served at the root
        app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")

    return app


# Default app instance for uvicorn (reads settings from the environment)
app = create_app()
