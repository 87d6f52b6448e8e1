"""
================================================================================
CLASSIFIER - Transaction Categorization and Cost Basis Pass
================================================================================

Walks the transaction history one day at a time, oldest day first, and files
every transaction into exactly one category, updating the lot ledger as a
side effect.

Rule Order (first match wins):
    1. Lending          - trade group/comment mentions lending
    2. Margin           - trade group/comment mentions margin
    3. UsdBuy           - crypto sold for USD (incl. card spends seen as small
                          Coinbase withdrawals); never for Tether
    4. Trade            - crypto-to-crypto; like-kind deferral before 2018
    5. Income           - lot at the day's price
    6. Deposit          - USD deposit, airdrop, matched transfer, or an
                          unmatched deposit valued at the day's price
    7-9. Withdrawal, Lost, Spend - no ledger effect
    Anything else aborts the run (UnknownTransactionTypeError).

Recoverable problems (missing lots, missing prices, unmatched deposits) are
logged and recorded on the result for manual review; they never stop the run.

Author: robertbiv
Last Modified: December 2025
================================================================================
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from cost_basis.core.grouping import group_by_day
from cost_basis.core.ledger import LotLedger, NoAvailablePurchaseError
from cost_basis.core.matcher import find_matching_withdrawal
from cost_basis.core.models import Diagnostic, LikeKindExchange, SaleRecord, Transaction, parse_day
from cost_basis.decimal_utils import is_blank_amount
from cost_basis.processors.price_fetcher import PriceError
from cost_basis.utils.config import EngineSettings
from cost_basis.utils import constants as C

logger = logging.getLogger("cost_basis")


class UnknownTransactionTypeError(Exception):
    """A transaction no rule knows how to handle; fatal for the whole run"""

    def __init__(self, transaction: Transaction):
        self.transaction = transaction
        super().__init__(f"I do not know how to handle this transaction: {transaction.describe()}")


@dataclass
class ClassificationResult:
    buckets: Dict[str, List[Transaction]] = field(
        default_factory=lambda: {c: [] for c in C.CATEGORIES})
    sales: List[SaleRecord] = field(default_factory=list)
    like_kind_exchanges: List[LikeKindExchange] = field(default_factory=list)
    no_available_purchases: List[Diagnostic] = field(default_factory=list)
    no_matching_withdrawals: List[Diagnostic] = field(default_factory=list)
    price_errors: List[Diagnostic] = field(default_factory=list)
    ledger: LotLedger = field(default_factory=LotLedger)

    def bucket(self, category: str) -> List[Transaction]:
        return self.buckets[category]

    @property
    def total_classified(self) -> int:
        return sum(len(b) for b in self.buckets.values())

    @property
    def total_gain(self) -> Decimal:
        return sum((s.gain for s in self.sales), Decimal(0))


def _mentions(tx: Transaction, word: str) -> bool:
    return word in tx.trade_group.lower() or word in tx.comment.lower()


class Classifier:
    """
    Single-use driver for one classification run.

    Args:
        price_fetcher: anything with get_price(from_asset, to_asset, day, venue=None)
        settings: classification options (airdrop symbols, cutoff year, ...)
    """

    def __init__(self, price_fetcher, settings: Optional[EngineSettings] = None):
        self.prices = price_fetcher
        self.settings = settings or EngineSettings()

    def run(self, transactions: Iterable[Transaction]) -> ClassificationResult:
        result = ClassificationResult()
        txs_by_day = group_by_day(transactions)
        logger.info(f"Classifying transactions across {len(txs_by_day)} day(s)")

        # Days chronologically; stable sort keeps file order within a day
        for day, group in sorted(txs_by_day.items(), key=lambda kv: parse_day(kv[0])):
            for tx in group:
                category = self.classify(tx, group, result)
                logger.debug(f"{day}: {tx.type} -> {category}")

        logger.info(
            f"Classified {result.total_classified} transaction(s): "
            f"{len(result.sales)} sale(s), {len(result.like_kind_exchanges)} like-kind exchange(s), "
            f"{len(result.no_available_purchases)} missing purchase(s), "
            f"{len(result.price_errors)} price error(s)"
        )
        return result

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------
    def is_usd_buy(self, tx: Transaction) -> bool:
        """USD buy = crypto sale"""
        card_spend = (tx.type == C.TYPE_WITHDRAWAL and
                      tx.exchange == self.settings.usd_sale_exchange and
                      is_blank_amount(tx.fee) and
                      0 < tx.sell < self.settings.usd_sale_max_amount)
        usd_trade = tx.type == C.TYPE_TRADE and tx.cur_buy == C.USD
        return (card_spend or usd_trade) and tx.cur_sell != C.TETHER

    def classify(self, tx: Transaction, group: List[Transaction], result: ClassificationResult) -> str:
        """File one transaction; `group` is its day's transactions in original order"""
        # Lending and margin must go ahead of Trade
        if _mentions(tx, 'lending'):
            return self._file(result, C.CATEGORY_LENDING, tx)
        if _mentions(tx, 'margin'):
            return self._file(result, C.CATEGORY_MARGIN, tx)

        # Must go ahead of Trade and Withdrawal
        if self.is_usd_buy(tx):
            self._usd_buy(tx, result)
            return self._file(result, C.CATEGORY_USD_BUY, tx)

        if tx.type == C.TYPE_TRADE:
            self._trade(tx, result)
            return self._file(result, C.CATEGORY_TRADE, tx)

        if tx.type == C.TYPE_INCOME:
            p = self._price(tx, tx.cur_buy, result)
            result.ledger.deposit(tx.buy, tx.cur_buy, tx.buy * p, tx.trade_date)
            return self._file(result, C.CATEGORY_INCOME, tx)

        if tx.type == C.TYPE_DEPOSIT:
            return self._deposit(tx, group, result)

        if tx.type == C.TYPE_WITHDRAWAL:
            return self._file(result, C.CATEGORY_WITHDRAWAL, tx)
        if tx.type == C.TYPE_LOST:
            return self._file(result, C.CATEGORY_LOST, tx)
        if tx.type == C.TYPE_SPEND:
            return self._file(result, C.CATEGORY_SPEND, tx)

        raise UnknownTransactionTypeError(tx)

    def _usd_buy(self, tx: Transaction, result: ClassificationResult):
        if tx.type == C.TYPE_TRADE:
            proceeds = tx.buy
        else:
            # Card spends only carry the token amount; value it at the day's price
            p = self._price(tx, tx.cur_sell, result, venue=self.settings.usd_sale_venue)
            proceeds = tx.sell * p
        self._dispose(tx, result, tx.sell, tx.cur_sell, proceeds, C.USD)

    def _trade(self, tx: Transaction, result: ClassificationResult):
        deferred = tx.year < self.settings.like_kind_cutoff_year
        price = None
        if not deferred and tx.cur_buy != C.USD:
            price = self._price(tx, tx.cur_buy, result)
        records = self._dispose(tx, result, tx.sell, tx.cur_sell, tx.buy, tx.cur_buy,
                                price=price, deferred=deferred)
        if deferred:
            result.like_kind_exchanges.extend(records)

    def _deposit(self, tx: Transaction, group: List[Transaction], result: ClassificationResult) -> str:
        # USD deposits have as-is cost basis
        if tx.cur_buy == C.USD:
            result.ledger.deposit(tx.buy, C.USD, tx.buy, tx.trade_date)
            return self._file(result, C.CATEGORY_USD_DEPOSIT, tx)

        # Airdrops have cost basis of 0
        if tx.cur_buy in self.settings.airdrop_symbols:
            result.ledger.deposit(tx.buy, tx.cur_buy, Decimal(0), tx.trade_date)
            return self._file(result, C.CATEGORY_AIRDROP, tx)

        # Same-day transfer between our own accounts
        if find_matching_withdrawal(tx, group, self.settings.match_tolerance) is not None:
            return self._file(result, C.CATEGORY_MATCHED_DEPOSIT, tx)

        message = (f"No matching withdrawal for deposit of {tx.buy} {tx.cur_buy} "
                   f"on {tx.trade_date}. Using historical price.")
        logger.warning(message)
        result.no_matching_withdrawals.append(Diagnostic(tx, message, kind='no_matching_withdrawal'))

        p = self._price(tx, tx.cur_buy, result)
        cost_basis_tx = tx.derive(type=C.TYPE_INCOME, comment=C.COST_BASIS_COMMENT, price=p)
        result.ledger.deposit(tx.buy, tx.cur_buy, tx.buy * p, tx.trade_date)
        return self._file(result, C.CATEGORY_UNMATCHED_DEPOSIT, cost_basis_tx)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _file(result: ClassificationResult, category: str, tx: Transaction) -> str:
        result.buckets[category].append(tx)
        return category

    def _price(self, tx: Transaction, asset: str, result: ClassificationResult,
               venue: Optional[str] = None) -> Decimal:
        """Day-of USD price for `asset`; 0 (recorded for review) when the lookup fails"""
        try:
            return self.prices.get_price(asset, C.USD, tx.iso_day, venue or self.settings.default_venue)
        except PriceError as e:
            logger.error(f"Error fetching price: {e}")
            result.price_errors.append(Diagnostic(tx, str(e), kind='price'))
            return Decimal(0)

    def _dispose(self, tx, result, sell_amount, sell_asset, acquire_amount, acquire_asset,
                 price=None, deferred=False):
        try:
            records = result.ledger.dispose_and_acquire(
                sell_amount, sell_asset, acquire_amount, acquire_asset,
                tx.trade_date, acquire_price=price, deferred=deferred)
        except NoAvailablePurchaseError as e:
            logger.error(f"Error making trade: {e}")
            result.no_available_purchases.append(Diagnostic(tx, str(e), kind='no_available_purchase'))
            return []
        if not deferred:
            result.sales.extend(records)
        return records


def calculate(transactions: Iterable[Transaction], price_fetcher,
              settings: Optional[EngineSettings] = None) -> ClassificationResult:
    """Classify a transaction history and compute its sales"""
    return Classifier(price_fetcher, settings).run(transactions)
