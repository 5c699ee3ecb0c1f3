"""Summary totals for a page of transactions."""

from typing import Sequence

from ynab_query.models.results import Summary
from ynab_query.models.transaction import NormalizedTransaction
from ynab_query.utils.decimal_utils import round_money, sum_amounts


def calculate_summary(
    page_transactions: Sequence[NormalizedTransaction],
    all_transactions: Sequence[NormalizedTransaction],
) -> Summary:
    """Compute money totals for a page and the date span of the full set.

    Totals are summed exactly and rounded to cents once, afterwards. The
    date range covers every active transaction, not just the page.

    Args:
        page_transactions: Transactions on the current page.
        all_transactions: All non-deleted transactions fetched.

    Returns:
        Summary for the page.
    """
    total_inflow = sum_amounts(t.inflow for t in page_transactions)
    total_outflow = sum_amounts(t.outflow for t in page_transactions)

    date_from = min((t.date for t in all_transactions), default=None)
    date_to = max((t.date for t in all_transactions), default=None)

    return Summary(
        date_from=date_from,
        date_to=date_to,
        total_inflow=round_money(total_inflow),
        total_outflow=round_money(total_outflow),
        net=round_money(total_inflow - total_outflow),
    )
