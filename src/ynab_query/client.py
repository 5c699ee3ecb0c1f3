"""YNAB API client wrapper returning typed fetch results."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from ynab_query.models.transaction import RawTransaction
from ynab_query.utils.logging_config import LogContext, get_logger

logger = get_logger(__name__)


class UpstreamFetchError(Exception):
    """Raised when the budgeting API cannot supply transactions."""

    def __init__(self, message: str, cause: BaseException | None = None):
        """Initialize UpstreamFetchError.

        Args:
            message: Error message.
            cause: The underlying SDK or network exception, if any.
        """
        self.cause = cause
        super().__init__(message)


class APITokenNotFoundError(UpstreamFetchError):
    """Raised when no API token is configured."""

    pass


@dataclass(frozen=True)
class FetchResult:
    """Raw transactions from one API call, or the error that prevented them."""

    transactions: list[RawTransaction] = field(default_factory=list)
    error: UpstreamFetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _describe_error(error: BaseException) -> str:
    """Best human-readable message for an SDK exception."""
    # ynab.ApiException carries the HTTP status and the API's error body
    status = getattr(error, "status", None)
    reason = getattr(error, "reason", None)
    message = str(error).strip()
    if not message and status is not None:
        message = f"HTTP {status} {reason or ''}".strip()
    return message or type(error).__name__


@dataclass
class BudgetClient:
    """Wrapper around the YNAB SDK transactions endpoint.

    The SDK is initialized lazily on the first request. Every SDK failure is
    logged with its traceback and returned as a ``FetchResult`` error rather
    than raised.
    """

    api_token: str | None = field(default=None, repr=False)
    transactions_api: Any = field(default=None, repr=False)

    @property
    def is_available(self) -> bool:
        """Check if the client can make requests (token or injected API)."""
        return self.transactions_api is not None or bool(self.api_token)

    def _ensure_initialized(self) -> Any:
        """Lazily build the SDK's TransactionsApi."""
        if self.transactions_api is not None:
            return self.transactions_api

        if not self.api_token:
            raise APITokenNotFoundError(
                "YNAB_API_TOKEN environment variable is not set. "
                "Please set it to a valid YNAB API token."
            )

        try:
            import ynab
        except ImportError as err:
            raise UpstreamFetchError(
                "ynab package not installed. Run: pip install ynab", err
            ) from err

        configuration = ynab.Configuration(access_token=self.api_token)
        api_client = ynab.ApiClient(configuration)
        self.transactions_api = ynab.TransactionsApi(api_client)
        logger.info("YNAB client initialized")
        return self.transactions_api

    def fetch_transactions(self, budget_id: str, since_date: date) -> FetchResult:
        """Fetch all transactions on or after a date.

        Args:
            budget_id: Budget to read.
            since_date: Earliest transaction date to include.

        Returns:
            FetchResult with raw transactions (deleted ones included).
        """
        return self._fetch(
            "fetch_transactions",
            budget_id,
            lambda api: api.get_transactions(budget_id, since_date=since_date),
            since_date=since_date,
        )

    def fetch_month_transactions(self, budget_id: str, month: date) -> FetchResult:
        """Fetch the transactions of a single budget month.

        Args:
            budget_id: Budget to read.
            month: Any date in the month (the first day is sent).

        Returns:
            FetchResult with raw transactions (deleted ones included).
        """
        first_day = month.replace(day=1)
        return self._fetch(
            "fetch_month_transactions",
            budget_id,
            lambda api: api.get_transactions_by_month(budget_id, first_day),
            month=f"{first_day:%Y-%m}",
        )

    def _fetch(
        self, operation: str, budget_id: str, call: Any, **window: object
    ) -> FetchResult:
        try:
            with LogContext(logger, operation, budget_id=budget_id, **window) as log:
                api = self._ensure_initialized()
                response = call(api)
                transactions = [
                    RawTransaction.from_api(self._as_mapping(item))
                    for item in (response.data.transactions or [])
                ]
                log.record(transactions=len(transactions))
        except UpstreamFetchError as e:
            return FetchResult(error=e)
        except Exception as e:
            # LogContext has already logged the failure
            return FetchResult(error=UpstreamFetchError(_describe_error(e), e))

        return FetchResult(transactions=transactions)

    @staticmethod
    def _as_mapping(item: Any) -> dict[str, Any]:
        """Dict form of an SDK model, using API (aliased) field names."""
        if isinstance(item, dict):
            return item
        return item.to_dict()
