"""Transaction data models for budgeting-service records."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from ynab_query.utils.date_utils import coerce_date


class ClearedStatus(Enum):
    """Cleared state of a transaction in the budget."""

    CLEARED = "cleared"
    UNCLEARED = "uncleared"
    RECONCILED = "reconciled"

    @classmethod
    def from_api(cls, value: object) -> "ClearedStatus":
        """Build from an SDK enum member or its raw string value."""
        if isinstance(value, cls):
            return value
        raw = getattr(value, "value", value)
        return cls(str(raw).lower())


@dataclass(frozen=True)
class RawTransaction:
    """Transaction record as supplied by the budgeting API.

    The amount is a signed integer in milliunits (1/1000 of a currency unit).
    ``transfer_transaction_id`` points at the counterpart record when this is
    one half of a transfer between two accounts in the same budget.
    """

    id: str
    date: date
    account_name: str
    amount: int
    cleared: ClearedStatus
    approved: bool
    payee_name: str | None = None
    category_name: str | None = None
    memo: str | None = None
    transfer_transaction_id: str | None = None
    deleted: bool = False

    @property
    def is_transfer(self) -> bool:
        """Whether this record is one half of an internal transfer."""
        return bool(self.transfer_transaction_id)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "RawTransaction":
        """Create from the dict form of an SDK ``TransactionDetail``.

        Optional keys may be absent entirely (the SDK drops ``None`` values
        when dumping models).

        Args:
            data: Mapping with API field names.

        Returns:
            RawTransaction instance.
        """
        return cls(
            id=str(data["id"]),
            date=coerce_date(data["date"]),
            account_name=str(data.get("account_name") or ""),
            amount=int(data["amount"]),
            cleared=ClearedStatus.from_api(data["cleared"]),
            approved=bool(data.get("approved", False)),
            payee_name=data.get("payee_name"),
            category_name=data.get("category_name"),
            memo=data.get("memo"),
            transfer_transaction_id=data.get("transfer_transaction_id"),
            deleted=bool(data.get("deleted", False)),
        )


@dataclass(frozen=True)
class NormalizedTransaction:
    """Display-ready transaction with the amount split into inflow/outflow.

    Attributes:
        id: Unique identifier from the budgeting API.
        date: Transaction date.
        account_name: Name of the account the transaction belongs to.
        payee_name: Payee name, if any.
        category_name: Category name, if any.
        memo: Free-text memo, if any.
        inflow: Money in, major units (zero for outflows).
        outflow: Money out as a positive number, major units (zero for inflows).
        cleared: Cleared status.
        approved: Whether the transaction has been approved.
        transfer_transaction_id: Counterpart identifier for transfers.
    """

    id: str
    date: date
    account_name: str
    inflow: Decimal
    outflow: Decimal
    cleared: ClearedStatus
    approved: bool
    payee_name: str | None = None
    category_name: str | None = None
    memo: str | None = None
    transfer_transaction_id: str | None = None

    @property
    def is_transfer(self) -> bool:
        """Whether this transaction is one half of an internal transfer."""
        return bool(self.transfer_transaction_id)

    @property
    def signed_amount(self) -> Decimal:
        """Signed amount in major units (positive for inflows)."""
        return self.inflow - self.outflow

    def to_dict(self) -> dict[str, object]:
        """Serialize to JSON-compatible output."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "account_name": self.account_name,
            "payee_name": self.payee_name,
            "category_name": self.category_name,
            "memo": self.memo,
            "inflow": float(self.inflow),
            "outflow": float(self.outflow),
            "cleared": self.cleared.value,
            "approved": self.approved,
            "transfer_transaction_id": self.transfer_transaction_id,
        }

    def __repr__(self) -> str:
        return (
            f"NormalizedTransaction(id={self.id!r}, date={self.date}, "
            f"amount={self.signed_amount}, account={self.account_name!r})"
        )


@dataclass(frozen=True)
class TransferGroup:
    """Both halves of a reconciled transfer.

    ``primary`` is the outflow side and ``related`` the inflow side.
    """

    primary: NormalizedTransaction
    related: NormalizedTransaction

    @property
    def member_ids(self) -> tuple[str, str]:
        """Identifiers of (primary, related)."""
        return (self.primary.id, self.related.id)

    def to_dict(self) -> dict[str, object]:
        """Serialize to JSON-compatible output."""
        return {
            "primary": self.primary.to_dict(),
            "related": self.related.to_dict(),
        }
