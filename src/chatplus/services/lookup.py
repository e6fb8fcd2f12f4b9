"""LookupService — read-only roster and target resolution queries."""

from __future__ import annotations

from chatplus.domain.types import ErrorCode
from chatplus.services.base import BaseService
from chatplus.services.result import CommandResult


class LookupService(BaseService):
    """Answer "who is here" and "who would this query reach"."""

    def roster(self) -> CommandResult:
        participants = self._runtime.directory.snapshot()
        return CommandResult.success(
            "roster",
            {
                "count": len(participants),
                "participants": [p.describe() for p in participants],
            },
        )

    def resolve(self, query: str) -> CommandResult:
        """Resolve *query* the way ``pm`` would; unauthenticated matches fail."""
        match = self._runtime.resolver.resolve(query)
        if match is None:
            return CommandResult.failure(
                "resolve",
                ErrorCode.TARGET_NOT_FOUND,
                f"No participant matches {query!r}",
                query=query,
            )
        if not match.is_authenticated:
            return CommandResult.failure(
                "resolve",
                ErrorCode.TARGET_NOT_FOUND,
                f"{match.display_name} matches {query!r} but is not authenticated",
                query=query,
                match=match.describe(),
            )
        return CommandResult.success("resolve", {"query": query, "match": match.describe()})
