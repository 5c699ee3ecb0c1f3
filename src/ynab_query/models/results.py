"""Result models produced by the listing and search pipelines."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

from ynab_query.models.transaction import NormalizedTransaction, TransferGroup
from ynab_query.utils.date_utils import date_to_iso

T = TypeVar("T")


class MatchedField(Enum):
    """Which text field(s) of a transaction matched a search."""

    MEMO = "memo"
    PAYEE = "payee"
    BOTH = "both"


@dataclass(frozen=True)
class SearchResult:
    """A transaction that matched a search, with its relevance.

    Attributes:
        transaction: The matching transaction.
        matched_field: Memo, payee, or both.
        relevance_score: Heuristic score, higher is better (always > 0 here).
    """

    transaction: NormalizedTransaction
    matched_field: MatchedField
    relevance_score: float

    @property
    def date(self) -> date:
        return self.transaction.date

    def to_dict(self) -> dict[str, object]:
        """Serialize to JSON-compatible output."""
        data = self.transaction.to_dict()
        data["matched_field"] = self.matched_field.value
        data["relevance_score"] = self.relevance_score
        return data


@dataclass(frozen=True)
class OffsetPagination:
    """Pagination metadata for offset/limit addressing."""

    offset: int
    limit: int
    total: int
    has_more: bool
    next_offset: int | None

    def to_dict(self) -> dict[str, object]:
        return {
            "offset": self.offset,
            "limit": self.limit,
            "total": self.total,
            "has_more": self.has_more,
            "next_offset": self.next_offset,
        }


@dataclass(frozen=True)
class PagePagination:
    """Pagination metadata for 1-indexed page/page-size addressing."""

    page: int
    page_size: int
    total: int
    total_pages: int
    next_page: int | None


@dataclass(frozen=True)
class Summary:
    """Money totals for a page plus the date span of the full result set.

    Attributes:
        date_from: Earliest date across all active transactions (None if empty).
        date_to: Latest date across all active transactions (None if empty).
        total_inflow: Sum of page inflows, rounded to cents.
        total_outflow: Sum of page outflows, rounded to cents.
        net: total_inflow minus total_outflow, rounded to cents.
    """

    date_from: date | None
    date_to: date | None
    total_inflow: Decimal
    total_outflow: Decimal
    net: Decimal

    def to_dict(self) -> dict[str, object]:
        return {
            "date_range": {
                "from": date_to_iso(self.date_from),
                "to": date_to_iso(self.date_to),
            },
            "total_inflow": float(self.total_inflow),
            "total_outflow": float(self.total_outflow),
            "net": float(self.net),
        }


@dataclass(frozen=True)
class ListingResult:
    """Output of the listing pipeline."""

    transactions: list[NormalizedTransaction]
    related_transactions: dict[str, TransferGroup]
    pagination: OffsetPagination
    summary: Summary

    def to_dict(self) -> dict[str, object]:
        return {
            "transactions": [t.to_dict() for t in self.transactions],
            "related_transactions": {
                link_id: group.to_dict()
                for link_id, group in self.related_transactions.items()
            },
            "pagination": self.pagination.to_dict(),
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class SearchResponse:
    """Output of the search pipeline."""

    results: list[SearchResult]
    pagination: PagePagination

    @property
    def total_matches(self) -> int:
        return self.pagination.total

    @property
    def next_page(self) -> int | None:
        return self.pagination.next_page

    def to_dict(self) -> dict[str, object]:
        return {
            "total_matches": self.total_matches,
            "results": [r.to_dict() for r in self.results],
            "next_page": self.next_page,
        }


@dataclass(frozen=True)
class PipelineResult(Generic[T]):
    """Outcome of a pipeline run: either a value or a reported error.

    Failures keep the original exception for diagnostics alongside the
    human-readable message handed back to callers.

    Attributes:
        value: Pipeline output on success.
        error: The configuration or upstream error on failure.
        error_message: Caller-facing description of the failure.
    """

    value: T | None = None
    error: Exception | None = field(default=None, compare=False)
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "PipelineResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception, message: str) -> "PipelineResult[T]":
        return cls(error=error, error_message=message)

    def to_output(self) -> dict[str, object] | str:
        """Serialized value on success, the error message otherwise."""
        if not self.ok or self.value is None:
            return self.error_message or "Unknown error"
        return self.value.to_dict()  # type: ignore[attr-defined]
