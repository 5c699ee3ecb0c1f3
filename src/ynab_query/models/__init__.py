"""Data models for budget transactions, query requests, and results."""

from ynab_query.models.query import ListTransactionsRequest, SearchTransactionsRequest
from ynab_query.models.results import (
    ListingResult,
    MatchedField,
    OffsetPagination,
    PagePagination,
    PipelineResult,
    SearchResponse,
    SearchResult,
    Summary,
)
from ynab_query.models.transaction import (
    ClearedStatus,
    NormalizedTransaction,
    RawTransaction,
    TransferGroup,
)

__all__ = [
    "ClearedStatus",
    "RawTransaction",
    "NormalizedTransaction",
    "TransferGroup",
    "ListTransactionsRequest",
    "SearchTransactionsRequest",
    "MatchedField",
    "SearchResult",
    "OffsetPagination",
    "PagePagination",
    "Summary",
    "ListingResult",
    "SearchResponse",
    "PipelineResult",
]
