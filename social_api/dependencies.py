from fastapi import Query

from social_api.config import settings

# Largest page index whose OFFSET still fits a signed 64-bit integer.
MAX_PAGE = (2**63 - 1) // settings.MAX_PAGE_SIZE - 1


class PaginationParams:
    """
    Reusable FastAPI dependency for the ``page`` / ``pageSize`` query
    parameters of the list endpoints.

    Usage in a router::

        @router.get("/comments/user/{user_id}")
        async def list_comments(pagination: PaginationParams = Depends()):
            ...

    Attributes
    ----------
    page:
        0-based page index.
    page_size:
        Number of items per page, clamped to ``settings.MAX_PAGE_SIZE``.
    offset:
        Computed SQL OFFSET derived from *page* and *page_size*.
    """

    def __init__(
        self,
        page: int = Query(
            0,
            ge=0,
            le=MAX_PAGE,
            description="Page index (0-based).",
        ),
        page_size: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            alias="pageSize",
            ge=1,
            description="Number of items returned per page.",
        ),
    ) -> None:
        self.page = page
        self.page_size = min(page_size, settings.MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return self.page * self.page_size
