"""HTTP repository for comments."""

from barbershop_tenancy.core.repository import HttpRepository
from barbershop_tenancy.modules.comments.schemas import Comment


class CommentRepository(HttpRepository[Comment]):
    resource = "comments"
    model = Comment
