from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any

DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class MemberQuery:
    """
    Member directory query state.

    Every change other than moving between pages starts again from page 1,
    so a new page size or filter never lands on a page past the end.
    """

    search: str | None = None
    status: str = "ALL"
    family_id: int | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
    page: int = 1
    limit: int = DEFAULT_LIMIT

    def with_page(self, page: int) -> MemberQuery:
        return replace(self, page=max(page, 1))

    def with_limit(self, limit: int) -> MemberQuery:
        if limit == self.limit:
            return self
        return replace(self, limit=limit, page=1)

    def with_search(self, search: str | None) -> MemberQuery:
        return replace(self, search=search or None, page=1)

    def with_status(self, status: str) -> MemberQuery:
        return replace(self, status=status, page=1)

    def with_family(self, family_id: int | None) -> MemberQuery:
        return replace(self, family_id=family_id, page=1)

    def with_sort(self, sort_by: str, sort_order: str = "asc") -> MemberQuery:
        return replace(self, sort_by=sort_by, sort_order=sort_order, page=1)

    def params(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}
