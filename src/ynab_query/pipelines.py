"""Listing and search pipelines over budget transactions."""

from datetime import date
from typing import Callable

from ynab_query.client import BudgetClient, FetchResult
from ynab_query.config import Config, ConfigurationError
from ynab_query.models.query import ListTransactionsRequest, SearchTransactionsRequest
from ynab_query.models.results import ListingResult, PipelineResult, SearchResponse
from ynab_query.models.transaction import NormalizedTransaction
from ynab_query.processing.normalizer import Normalizer
from ynab_query.processing.paginator import paginate_offset, paginate_page
from ynab_query.processing.search_scorer import SearchScorer
from ynab_query.processing.summary import calculate_summary
from ynab_query.processing.transfer_grouper import TransferGrouper
from ynab_query.utils.date_utils import days_before
from ynab_query.utils.logging_config import get_logger

logger = get_logger(__name__)


def sort_newest_first(transactions: list[NormalizedTransaction]) -> list[NormalizedTransaction]:
    """Order by date descending, then identifier descending.

    The identifier stands in for creation order among same-day transactions.
    """
    return sorted(transactions, key=lambda t: (t.date, t.id), reverse=True)


class _BudgetPipeline:
    """Shared budget resolution and fetching for both pipelines.

    Pipelines keep no per-run state, so one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        config: Config,
        client: BudgetClient | None = None,
        today: Callable[[], date] = date.today,
    ):
        """Initialize pipeline.

        Args:
            config: Application configuration.
            client: Budgeting API client (default: built from config token).
            today: Clock used for default date windows.
        """
        self.config = config
        self.client = client if client is not None else BudgetClient(api_token=config.api_token)
        self.today = today
        self.normalizer = Normalizer()

    def _resolve_budget(self, requested: str | None) -> str:
        return self.config.resolve_budget_id(requested)


class ListingPipeline(_BudgetPipeline):
    """Lists transactions with pagination, transfer groups and a summary."""

    def run(self, request: ListTransactionsRequest) -> PipelineResult[ListingResult]:
        """Execute the listing pipeline.

        Args:
            request: Validated listing parameters.

        Returns:
            PipelineResult with a ListingResult, or the reported failure.
        """
        try:
            budget_id = self._resolve_budget(request.budget_id)
        except ConfigurationError as e:
            return PipelineResult.failure(e, str(e))

        fetched = self._fetch(budget_id, request)
        if fetched.error is not None:
            logger.error(f"Error fetching transactions for budget {budget_id}: {fetched.error}")
            return PipelineResult.failure(
                fetched.error, f"Error fetching transactions: {fetched.error}"
            )

        all_active = self.normalizer.normalize(fetched.transactions)

        candidates = all_active
        if request.payments_only:
            candidates = [t for t in all_active if not t.is_transfer]

        ordered = sort_newest_first(candidates)
        page, pagination = paginate_offset(
            ordered,
            offset=request.offset,
            limit=request.limit,
            default_limit=self.config.listing.default_limit,
            max_limit=self.config.listing.max_limit,
        )

        related = {} if request.payments_only else TransferGrouper().group(page)
        summary = calculate_summary(page, all_active)

        return PipelineResult.success(
            ListingResult(
                transactions=page,
                related_transactions=related,
                pagination=pagination,
                summary=summary,
            )
        )

    def _fetch(self, budget_id: str, request: ListTransactionsRequest) -> FetchResult:
        if request.month is not None:
            return self.client.fetch_month_transactions(budget_id, request.month)

        since_date = request.since_date
        if since_date is None:
            since_date = days_before(self.today(), self.config.listing.default_lookback_days)
        return self.client.fetch_transactions(budget_id, since_date)


class SearchPipeline(_BudgetPipeline):
    """Searches memo and payee text and returns ranked, paginated matches."""

    def run(self, request: SearchTransactionsRequest) -> PipelineResult[SearchResponse]:
        """Execute the search pipeline.

        Args:
            request: Validated search parameters.

        Returns:
            PipelineResult with a SearchResponse, or the reported failure.
        """
        try:
            budget_id = self._resolve_budget(request.budget_id)
        except ConfigurationError as e:
            return PipelineResult.failure(e, str(e))

        logger.info(
            f"Searching transactions in budget {budget_id} for {request.search_text!r} "
            f"since {request.since_date}, page {request.page}"
        )

        fetched = self.client.fetch_transactions(budget_id, request.since_date)
        if fetched.error is not None:
            logger.error(f"Error searching transactions in budget {budget_id}: {fetched.error}")
            return PipelineResult.failure(
                fetched.error, f"Error searching transactions: {fetched.error}"
            )

        active = self.normalizer.normalize(fetched.transactions)
        matches = SearchScorer(request.search_text).search(active)

        results, pagination = paginate_page(
            matches,
            page=request.page,
            page_size=request.page_size,
            default_page_size=self.config.search.default_page_size,
            max_page_size=self.config.search.max_page_size,
        )

        return PipelineResult.success(SearchResponse(results=results, pagination=pagination))
