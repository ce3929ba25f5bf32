"""Comments module."""

from barbershop_tenancy.modules.comments.repos import CommentRepository
from barbershop_tenancy.modules.comments.schemas import Comment, CommentStatus
from barbershop_tenancy.modules.comments.store import CommentStore


__all__ = [
    "Comment",
    "CommentRepository",
    "CommentStatus",
    "CommentStore",
]
