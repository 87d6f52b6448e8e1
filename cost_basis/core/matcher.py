"""
Deposit/withdrawal reconciliation.

A deposit matches a withdrawal on the same day when the currencies mirror
each other and both cross amounts agree within a small tolerance, i.e. the
pair is one internal transfer seen from both ends.
"""

from decimal import Decimal
from typing import Iterable, Optional

from cost_basis.core.models import Transaction
from cost_basis.utils.constants import MATCH_TOLERANCE, TYPE_DEPOSIT, TYPE_WITHDRAWAL

_PAIRED_TYPES = {
    TYPE_DEPOSIT: TYPE_WITHDRAWAL,
    TYPE_WITHDRAWAL: TYPE_DEPOSIT,
}


def other_type(tx_type: str) -> Optional[str]:
    """The transfer type on the other end (Deposit <-> Withdrawal), None for anything else"""
    return _PAIRED_TYPES.get(tx_type)


def close_enough(tx1: Transaction, tx2: Transaction, tolerance: Decimal = MATCH_TOLERANCE) -> bool:
    return (abs(tx1.buy - tx2.sell) <= tolerance and
            abs(tx1.sell - tx2.buy) <= tolerance)


def match(tx1: Transaction, tx2: Transaction, tolerance: Decimal = MATCH_TOLERANCE) -> bool:
    """Check if two transactions are the two ends of one transfer"""
    paired = other_type(tx2.type)
    return (paired is not None and
            tx1.type == paired and
            tx1.cur_buy == tx2.cur_sell and
            tx1.cur_sell == tx2.cur_buy and
            close_enough(tx1, tx2, tolerance))


def find_matching_withdrawal(deposit: Transaction, txs: Iterable[Transaction],
                             tolerance: Decimal = MATCH_TOLERANCE) -> Optional[Transaction]:
    """
    Return the first transaction in the day group that reconciles the deposit.

    First match wins: there is no search for a closest candidate, and a
    withdrawal is not consumed, so it may reconcile more than one deposit.
    """
    return next((tx for tx in txs if match(deposit, tx, tolerance)), None)
