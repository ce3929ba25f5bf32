"""Pydantic schemas for client comments."""

from enum import Enum

from barbershop_tenancy.core.repository import TenantEntity


class CommentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Comment(TenantEntity):
    """A client review awaiting or past moderation."""

    name: str
    comment: str
    status: CommentStatus = CommentStatus.PENDING
