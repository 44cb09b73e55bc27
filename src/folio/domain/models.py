"""Plain data aggregates returned by the persistence core.

All models are frozen: posts and guest messages are append-only, and a
post's image list is fixed at creation.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class Post(BaseModel):
    """A published blog entry with ordered image references."""

    model_config = {"frozen": True}

    id: str
    title: str
    body: str
    images: list[str] = Field(default_factory=list)
    created_at: datetime


class GuestMessage(BaseModel):
    """A message left by a visitor through the contact form."""

    model_config = {"frozen": True}

    name: str
    email: str
    message: str
    created_at: datetime


class UploadedFile(BaseModel):
    """Raw upload as received from the multipart parser."""

    model_config = {"frozen": True}

    filename: str
    content: bytes


class PostPage(BaseModel):
    """One 1-based window of posts ordered newest first."""

    model_config = {"frozen": True}

    posts: list[Post] = Field(default_factory=list)
    page: int
    page_size: int
    total: int
    last_page: int
