"""Transaction query pipeline components."""

from ynab_query.processing.normalizer import (
    Normalizer,
    normalize_transactions,
)
from ynab_query.processing.paginator import (
    paginate_offset,
    paginate_page,
)
from ynab_query.processing.search_scorer import (
    SearchScorer,
    search_transactions,
)
from ynab_query.processing.summary import calculate_summary
from ynab_query.processing.transfer_grouper import (
    TransferGrouper,
    group_transfers,
)

__all__ = [
    "Normalizer",
    "normalize_transactions",
    "TransferGrouper",
    "group_transfers",
    "SearchScorer",
    "search_transactions",
    "paginate_offset",
    "paginate_page",
    "calculate_summary",
]
