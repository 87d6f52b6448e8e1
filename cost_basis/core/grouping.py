"""Day grouping: the scope within which deposits are reconciled with withdrawals."""

from typing import Dict, Iterable, List

from cost_basis.core.models import Transaction


def group_by_day(transactions: Iterable[Transaction]) -> Dict[str, List[Transaction]]:
    """
    Partition transactions by the date portion of their trade date.

    Each day's list keeps the original relative order. Days appear in the
    order they are first seen; the classifier walks them by date.
    """
    txs_by_day: Dict[str, List[Transaction]] = {}
    for tx in transactions:
        txs_by_day.setdefault(tx.day, []).append(tx)
    return txs_by_day
