"""
================================================================================
CORE MODULE - Classification Engine and Lot Ledger
================================================================================

Exported Classes:
    Classifier - Day-by-day categorization pass driving the ledger
    ClassificationResult - Buckets, sales and diagnostics of one run
    LotLedger - Per-asset FIFO inventory of cost basis lots
    Transaction, Lot, SaleRecord, LikeKindExchange, Diagnostic - Records

Exported Functions:
    calculate - Classify a history in one call
    group_by_day - Partition transactions by calendar day
    find_matching_withdrawal - Same-day transfer reconciliation

Usage:
    from cost_basis.core import calculate
    result = calculate(transactions, price_fetcher)

Author: robertbiv
Last Modified: December 2025
================================================================================
"""

from cost_basis.core.models import Transaction, Lot, SaleRecord, LikeKindExchange, Diagnostic
from cost_basis.core.grouping import group_by_day
from cost_basis.core.matcher import match, find_matching_withdrawal
from cost_basis.core.ledger import LotLedger, NoAvailablePurchaseError
from cost_basis.core.classifier import (
    Classifier,
    ClassificationResult,
    UnknownTransactionTypeError,
    calculate,
)

__all__ = [
    'Transaction',
    'Lot',
    'SaleRecord',
    'LikeKindExchange',
    'Diagnostic',
    'group_by_day',
    'match',
    'find_matching_withdrawal',
    'LotLedger',
    'NoAvailablePurchaseError',
    'Classifier',
    'ClassificationResult',
    'UnknownTransactionTypeError',
    'calculate',
]
