"""Comment store."""

from barbershop_tenancy.core.constants import COMMENT_CACHE_TTL_SECONDS
from barbershop_tenancy.core.store import TenantScopedStore, query_key
from barbershop_tenancy.modules.comments.schemas import Comment, CommentStatus


class CommentStore(TenantScopedStore[Comment]):
    entity_name = "comments"
    default_ttl = COMMENT_CACHE_TTL_SECONDS

    async def fetch_by_status(self, status: CommentStatus) -> list[Comment]:
        filters = {"status": CommentStatus(status)}
        return await self._fetch(query_key(self.entity_name, filters), filters)

    async def update_status(
        self, comment_id: str, status: CommentStatus
    ) -> Comment | None:
        """Approve or reject a comment."""
        return await self.update(comment_id, {"status": CommentStatus(status).value})
