"""Transaction normalizer for converting raw API records to display form."""

from typing import Iterable

from ynab_query.models.transaction import NormalizedTransaction, RawTransaction
from ynab_query.utils.decimal_utils import split_amount
from ynab_query.utils.logging_config import get_logger

logger = get_logger(__name__)


class Normalizer:
    """Normalizes raw API transactions into NormalizedTransaction records.

    The normalizer:
    - Drops soft-deleted records
    - Converts milliunit amounts into separate inflow/outflow Decimals
    - Preserves input order
    """

    def normalize(self, raw_transactions: Iterable[RawTransaction]) -> list[NormalizedTransaction]:
        """Normalize a sequence of raw transactions.

        Args:
            raw_transactions: Raw transactions from the API client.

        Returns:
            Normalized transactions in input order, deleted ones excluded.
        """
        transactions = []
        total = 0

        for raw_txn in raw_transactions:
            total += 1
            if raw_txn.deleted:
                continue
            transactions.append(self.normalize_one(raw_txn))

        logger.info(f"Normalized {len(transactions)}/{total} transactions")
        return transactions

    def normalize_one(self, raw: RawTransaction) -> NormalizedTransaction:
        """Normalize a single raw transaction (deleted flag is not checked).

        Args:
            raw: Raw transaction.

        Returns:
            NormalizedTransaction.
        """
        inflow, outflow = split_amount(raw.amount)
        return NormalizedTransaction(
            id=raw.id,
            date=raw.date,
            account_name=raw.account_name,
            payee_name=raw.payee_name,
            category_name=raw.category_name,
            memo=raw.memo,
            inflow=inflow,
            outflow=outflow,
            cleared=raw.cleared,
            approved=raw.approved,
            transfer_transaction_id=raw.transfer_transaction_id,
        )


def normalize_transactions(raw_transactions: Iterable[RawTransaction]) -> list[NormalizedTransaction]:
    """Convenience function to normalize transactions.

    Args:
        raw_transactions: Raw transactions from the API client.

    Returns:
        List of normalized transactions.
    """
    return Normalizer().normalize(raw_transactions)
