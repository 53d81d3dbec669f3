"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel

from career_quest.models import LogEntry


class SendBody(BaseModel):
    message: str


class ConversationOut(BaseModel):
    stage: int
    log: list[LogEntry]
