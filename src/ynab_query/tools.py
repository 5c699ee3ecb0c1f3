"""Tool definitions: input validation and dispatch to the pipelines.

Tools accept loosely typed argument mappings (as received from a tool-calling
client), validate them into request values, run the matching pipeline and
return either a JSON-compatible dict or a human-readable error string.

Argument names are accepted in snake_case or camelCase.

Example usage:
    from ynab_query.config import load_config
    from ynab_query.tools import invoke_tool

    config = load_config()
    output = invoke_tool("search_transactions", {
        "search_text": "coffee",
        "since_date": "2024-01-01",
    }, config)
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ynab_query.client import BudgetClient
from ynab_query.config import Config
from ynab_query.models.query import ListTransactionsRequest, SearchTransactionsRequest
from ynab_query.pipelines import ListingPipeline, SearchPipeline
from ynab_query.utils.date_utils import (
    ISO_DATE_PATTERN,
    MONTH_PATTERN,
    parse_iso_date,
    parse_month,
)
from ynab_query.utils.logging_config import get_logger

logger = get_logger(__name__)

MAX_LIST_LIMIT = 500
MAX_SEARCH_PAGE_SIZE = 100


class ValidationError(ValueError):
    """Raised when tool arguments do not match the input schema."""

    pass


class _ToolArgs(BaseModel):
    # Strict mode keeps "10" out of int fields and 1 out of bool fields
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        strict=True,
    )

    budget_id: Optional[str] = Field(
        default=None,
        description="The ID of the budget (optional, defaults to YNAB_BUDGET_ID env variable)",
    )


class ListTransactionsArgs(_ToolArgs):
    """Arguments accepted by list_transactions."""

    month: Optional[str] = Field(
        default=None,
        pattern=MONTH_PATTERN.pattern,
        description="Filter by month in YYYY-MM format (e.g., 2024-03)",
    )
    since_date: Optional[str] = Field(
        default=None,
        pattern=ISO_DATE_PATTERN.pattern,
        description=(
            "Filter transactions since this date in YYYY-MM-DD format "
            "(defaults to 30 days ago if no month specified)"
        ),
    )
    offset: int = Field(default=0, ge=0, description="Pagination offset (default: 0)")
    limit: Optional[int] = Field(
        default=None,
        ge=1,
        description=f"Number of transactions per page (default: 100, max: {MAX_LIST_LIMIT})",
    )
    payments_only: bool = Field(
        default=False,
        description=(
            "If true, only show external payments "
            "(exclude transfers between your own accounts)"
        ),
    )

    @field_validator("month")
    @classmethod
    def check_month(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            parse_month(value)
        return value

    @field_validator("since_date")
    @classmethod
    def check_since_date(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            parse_iso_date(value)
        return value

    @field_validator("limit")
    @classmethod
    def clamp_limit(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return None
        return min(value, MAX_LIST_LIMIT)

    def to_request(self) -> ListTransactionsRequest:
        """Convert to the listing pipeline's request value."""
        return ListTransactionsRequest(
            budget_id=self.budget_id or None,
            month=parse_month(self.month) if self.month else None,
            since_date=parse_iso_date(self.since_date) if self.since_date else None,
            offset=self.offset,
            limit=self.limit,
            payments_only=self.payments_only,
        )


class SearchTransactionsArgs(_ToolArgs):
    """Arguments accepted by search_transactions."""

    search_text: str = Field(
        min_length=1,
        description="Text to search for in memo and payee names",
    )
    since_date: str = Field(
        pattern=ISO_DATE_PATTERN.pattern,
        description="Start date for search in YYYY-MM-DD format",
    )
    page: int = Field(default=1, ge=1, description="Page number to retrieve (1-indexed, default: 1)")
    page_size: Optional[int] = Field(
        default=None,
        ge=1,
        le=MAX_SEARCH_PAGE_SIZE,
        description=f"Number of results per page (default: 50, max: {MAX_SEARCH_PAGE_SIZE})",
    )

    @field_validator("search_text")
    @classmethod
    def check_search_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("since_date")
    @classmethod
    def check_since_date(cls, value: str) -> str:
        parse_iso_date(value)
        return value

    def to_request(self) -> SearchTransactionsRequest:
        """Convert to the search pipeline's request value."""
        return SearchTransactionsRequest(
            search_text=self.search_text,
            since_date=parse_iso_date(self.since_date),
            budget_id=self.budget_id or None,
            page=self.page,
            page_size=self.page_size,
        )


def _format_errors(error: pydantic.ValidationError) -> str:
    """Flatten pydantic errors into one line, naming each offending field."""
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]) or "arguments"
        parts.append(f"'{field}': {item['msg']}")
    return "; ".join(parts)


def _validate(model: type[BaseModel], arguments: Mapping[str, Any]) -> Any:
    try:
        return model.model_validate(dict(arguments))
    except pydantic.ValidationError as e:
        raise ValidationError(_format_errors(e)) from e


def parse_list_arguments(arguments: Mapping[str, Any]) -> ListTransactionsRequest:
    """Validate list_transactions arguments.

    A ``limit`` above the maximum is clamped rather than rejected.

    Args:
        arguments: Raw tool arguments.

    Returns:
        ListTransactionsRequest.

    Raises:
        ValidationError: If any argument is malformed or out of range.
    """
    return _validate(ListTransactionsArgs, arguments).to_request()


def parse_search_arguments(arguments: Mapping[str, Any]) -> SearchTransactionsRequest:
    """Validate search_transactions arguments.

    Args:
        arguments: Raw tool arguments.

    Returns:
        SearchTransactionsRequest.

    Raises:
        ValidationError: If any argument is missing, malformed or out of range.
    """
    return _validate(SearchTransactionsArgs, arguments).to_request()


@dataclass(frozen=True)
class ToolDefinition:
    """A named tool with its argument model and handler.

    Attributes:
        name: Tool name used for dispatch.
        description: What the tool does, for tool-calling clients.
        arguments_model: Pydantic model that validates the arguments.
        handler: Runs the tool; returns a dict or an error string.
    """

    name: str
    description: str
    arguments_model: type[BaseModel]
    handler: Callable[[Mapping[str, Any], Config, BudgetClient | None], dict[str, object] | str]

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of accepted arguments, under their snake_case names."""
        return self.arguments_model.model_json_schema(by_alias=False)


def run_list_transactions(
    arguments: Mapping[str, Any],
    config: Config,
    client: BudgetClient | None = None,
) -> dict[str, object] | str:
    """Validate arguments and run the listing pipeline."""
    request = parse_list_arguments(arguments)
    return ListingPipeline(config, client).run(request).to_output()


def run_search_transactions(
    arguments: Mapping[str, Any],
    config: Config,
    client: BudgetClient | None = None,
) -> dict[str, object] | str:
    """Validate arguments and run the search pipeline."""
    request = parse_search_arguments(arguments)
    return SearchPipeline(config, client).run(request).to_output()


LIST_TRANSACTIONS = ToolDefinition(
    name="list_transactions",
    description=(
        "Lists transactions for a month or since a date. Supports pagination, "
        "groups related transfer transactions, and can filter to show only "
        "external payments (non-transfers)."
    ),
    arguments_model=ListTransactionsArgs,
    handler=run_list_transactions,
)

SEARCH_TRANSACTIONS = ToolDefinition(
    name="search_transactions",
    description=(
        "Search transactions by memo or payee name (excluding transfers) with "
        "fuzzy matching. Returns most relevant results."
    ),
    arguments_model=SearchTransactionsArgs,
    handler=run_search_transactions,
)

TOOLS: dict[str, ToolDefinition] = {
    tool.name: tool for tool in (LIST_TRANSACTIONS, SEARCH_TRANSACTIONS)
}


def invoke_tool(
    name: str,
    arguments: Mapping[str, Any],
    config: Config,
    client: BudgetClient | None = None,
) -> dict[str, object] | str:
    """Dispatch a tool call by name.

    Args:
        name: Registered tool name.
        arguments: Raw tool arguments.
        config: Application configuration.
        client: Budgeting API client (default: built from config).

    Returns:
        JSON-compatible dict on success, error string on failure.

    Raises:
        ValidationError: If the tool is unknown or arguments are invalid.
    """
    tool = TOOLS.get(name)
    if tool is None:
        raise ValidationError(f"Unknown tool: {name}")

    logger.debug(f"Invoking tool {name}")
    return tool.handler(arguments, config, client)
