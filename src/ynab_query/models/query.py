"""Validated request values for the listing and search pipelines."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ListTransactionsRequest:
    """Parameters for listing transactions.

    Attributes:
        budget_id: Budget to query (None falls back to the configured default).
        month: First day of the month to list, or None.
        since_date: Earliest date to include when no month is given.
            None means the configured lookback window.
        offset: Number of transactions to skip.
        limit: Page size; None means the configured default.
        payments_only: Exclude transfers between the budget's own accounts.
    """

    budget_id: str | None = None
    month: date | None = None
    since_date: date | None = None
    offset: int = 0
    limit: int | None = None
    payments_only: bool = False


@dataclass(frozen=True)
class SearchTransactionsRequest:
    """Parameters for searching transactions by memo or payee.

    Attributes:
        search_text: Non-empty text to look for.
        since_date: Earliest date to search from.
        budget_id: Budget to query (None falls back to the configured default).
        page: 1-indexed page number.
        page_size: Results per page; None means the configured default.
    """

    search_text: str
    since_date: date
    budget_id: str | None = None
    page: int = 1
    page_size: int | None = None
