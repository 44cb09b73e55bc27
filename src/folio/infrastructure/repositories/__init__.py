"""Repository adapters for persistence concerns."""

from folio.infrastructure.repositories.messages import MessageRepository
from folio.infrastructure.repositories.posts import PostRepository

__all__ = ["MessageRepository", "PostRepository"]
