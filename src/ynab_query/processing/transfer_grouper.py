"""Pairing of transfer transactions with their counterparts."""

from typing import Sequence

from ynab_query.models.transaction import NormalizedTransaction, TransferGroup
from ynab_query.utils.logging_config import get_logger

logger = get_logger(__name__)


class TransferGrouper:
    """Groups the two halves of each transfer found in a working set.

    A transfer between two accounts of the same budget appears as two
    transactions whose ``transfer_transaction_id`` fields point at each
    other. Only pairs whose halves are both present in the supplied
    sequence are grouped, so grouping a single page leaves transfers whose
    counterpart sits on another page ungrouped.
    """

    def group(self, transactions: Sequence[NormalizedTransaction]) -> dict[str, TransferGroup]:
        """Pair transfer transactions with their counterparts.

        Groups are keyed by the ``transfer_transaction_id`` of whichever half
        is reached first in input order. The half with a positive outflow
        becomes ``primary``. When neither half has one (a zero-amount
        transfer) the half reached first is primary.

        Args:
            transactions: Working set, in presentation order.

        Returns:
            Dict mapping transfer-link ID to TransferGroup.
        """
        by_id: dict[str, NormalizedTransaction] = {}
        for txn in transactions:
            by_id.setdefault(txn.id, txn)

        groups: dict[str, TransferGroup] = {}
        grouped_ids: set[str] = set()

        for txn in transactions:
            link_id = txn.transfer_transaction_id
            if not link_id or txn.id in grouped_ids:
                continue

            counterpart = by_id.get(link_id)
            # Skip dangling links and counterparts already claimed by another pair
            if counterpart is None or counterpart.id in grouped_ids:
                continue

            grouped_ids.add(txn.id)
            grouped_ids.add(counterpart.id)

            if counterpart.outflow > 0 and not txn.outflow > 0:
                primary, related = counterpart, txn
            else:
                primary, related = txn, counterpart

            groups[link_id] = TransferGroup(primary=primary, related=related)

        logger.debug(f"Grouped {len(groups)} transfer pairs from {len(transactions)} transactions")
        return groups


def group_transfers(transactions: Sequence[NormalizedTransaction]) -> dict[str, TransferGroup]:
    """Convenience function to group transfer pairs.

    Args:
        transactions: Working set of normalized transactions.

    Returns:
        Dict mapping transfer-link ID to TransferGroup.
    """
    return TransferGrouper().group(transactions)
