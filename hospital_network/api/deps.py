from fastapi import Query

from hospital_network.core.db import get_db  # noqa: F401  (re-export para los routers)


class Page:
    """limit/offset comunes a los listados."""

    def __init__(
        self,
        limit: int = Query(100, ge=1, le=500),
        offset: int = Query(0, ge=0),
    ):
        self.limit = limit
        self.offset = offset

    def apply(self, q):
        return q.offset(self.offset).limit(self.limit)
