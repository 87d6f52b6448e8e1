"""
================================================================================
LOT LEDGER - Per-Asset FIFO Cost Basis Inventory
================================================================================

Keeps one queue of acquisition lots per asset. Deposits append to the back
of the queue; disposals consume from the front (oldest first), splitting the
last lot touched when only part of it is needed.

Disposal Modes:
    Realized  - one SaleRecord per consumed lot portion, proceeds allocated
                pro-rata to the portion's share of the disposal. A non-USD
                acquisition becomes a new lot at fair-market-value basis.
    Deferred  - like-kind exchange: no SaleRecord. The acquired asset gets
                one lot per consumed portion carrying that portion's cost
                (substituted basis).

Invariants:
    - A disposal either completes or leaves every queue untouched
      (NoAvailablePurchaseError is raised before anything is consumed).
    - Lots never hold a zero or negative amount; emptied lots are dropped.
    - Splitting a lot never changes its unit cost or acquisition date.

Author: robertbiv
Last Modified: December 2025
================================================================================
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Union

from cost_basis.core.models import Lot, SaleRecord, LikeKindExchange
from cost_basis.decimal_utils import to_decimal
from cost_basis.utils.constants import USD

logger = logging.getLogger("cost_basis")


class NoAvailablePurchaseError(Exception):
    """Raised when a disposal needs more of an asset than the ledger holds"""

    def __init__(self, asset: str, requested: Decimal, available: Decimal, date: str = ''):
        self.asset = asset
        self.requested = requested
        self.available = available
        self.date = date
        super().__init__(
            f"No available purchase for {requested} {asset} on {date}: "
            f"only {available} {asset} held"
        )


class LotLedger:
    def __init__(self):
        self._queues: Dict[str, List[Lot]] = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def lots(self, asset: str) -> List[Lot]:
        """Copy of the asset's queue, oldest lot first"""
        return [Lot(l.asset, l.amount, l.unit_cost, l.acquired) for l in self._queues.get(asset, [])]

    def available(self, asset: str) -> Decimal:
        return sum((l.amount for l in self._queues.get(asset, [])), Decimal(0))

    def cost_basis(self, asset: str) -> Decimal:
        return sum((l.cost_basis for l in self._queues.get(asset, [])), Decimal(0))

    def assets(self) -> List[str]:
        return [a for a, q in self._queues.items() if q]

    def snapshot(self) -> Dict[str, Decimal]:
        """Remaining holdings per asset"""
        return {a: self.available(a) for a in self.assets()}

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def deposit(self, amount, asset: str, cost_basis, date: str) -> Optional[Lot]:
        """Append a lot of `amount` units whose total USD basis is `cost_basis`"""
        amount, cost_basis = to_decimal(amount), to_decimal(cost_basis)
        if amount <= 0:
            logger.debug(f"Ignoring empty deposit of {amount} {asset} on {date}")
            return None
        lot = Lot(asset=asset, amount=amount, unit_cost=cost_basis / amount, acquired=date)
        self._queues.setdefault(asset, []).append(lot)
        return lot

    def dispose_and_acquire(self, sell_amount, sell_asset: str, acquire_amount, acquire_asset: str,
                            date: str, acquire_price=None,
                            deferred: bool = False) -> List[Union[SaleRecord, LikeKindExchange]]:
        """
        Dispose of `sell_amount` units of `sell_asset` in exchange for
        `acquire_amount` units of `acquire_asset`.

        Proceeds basis is the USD amount itself when acquiring USD, otherwise
        `acquire_amount * acquire_price`. With `deferred=True` the exchange is
        like-kind and no gain is realized.

        Returns:
            SaleRecords for a realized disposal, LikeKindExchange records for a
            deferred one.

        Raises:
            NoAvailablePurchaseError: not enough `sell_asset` held; nothing is mutated.
        """
        sell_amount, acquire_amount = to_decimal(sell_amount), to_decimal(acquire_amount)
        if sell_amount < 0 or acquire_amount < 0:
            raise ValueError(f"Negative trade amounts: {sell_amount} {sell_asset} -> {acquire_amount} {acquire_asset}")

        available = self.available(sell_asset)
        if available < sell_amount:
            raise NoAvailablePurchaseError(sell_asset, sell_amount, available, date)

        if acquire_asset == USD:
            proceeds_basis = acquire_amount
        else:
            proceeds_basis = acquire_amount * to_decimal(acquire_price)

        portions = self._consume(sell_asset, sell_amount)

        if deferred:
            return self._carry_basis(portions, sell_amount, sell_asset,
                                     acquire_amount, acquire_asset, date)

        sales = []
        for lot, take in portions:
            sales.append(SaleRecord(
                asset=sell_asset,
                amount_sold=take,
                proceeds=take / sell_amount * proceeds_basis,
                cost=take * lot.unit_cost,
                date=date,
                acquired=lot.acquired,
            ))
        if acquire_asset != USD:
            self.deposit(acquire_amount, acquire_asset, proceeds_basis, date)
        return sales

    def _consume(self, asset: str, amount: Decimal):
        """Take `amount` off the front of the queue; caller has checked availability"""
        queue = self._queues.get(asset, [])
        portions = []
        rem = amount
        while rem > 0 and queue:
            l = queue[0]
            take = l.amount if l.amount <= rem else rem
            portions.append((Lot(l.asset, take, l.unit_cost, l.acquired), take))
            l.amount -= take
            rem -= take
            if l.amount <= 0:
                queue.pop(0)
        return portions

    def _carry_basis(self, portions, sell_amount, sell_asset, acquire_amount, acquire_asset, date):
        if not portions:
            # Nothing given up: the acquisition arrives with no basis
            self.deposit(acquire_amount, acquire_asset, Decimal(0), date)
            return []

        exchanges = []
        handed_out = Decimal(0)
        for i, (lot, take) in enumerate(portions):
            carried = take * lot.unit_cost
            if i == len(portions) - 1:
                # Last portion takes the remainder; the lots sum to acquire_amount
                received = acquire_amount - handed_out
            else:
                received = acquire_amount * take / sell_amount
            handed_out += received
            if acquire_asset != USD:
                self.deposit(received, acquire_asset, carried, date)
            exchanges.append(LikeKindExchange(
                asset=sell_asset,
                amount_sold=take,
                acquired_asset=acquire_asset,
                amount_acquired=received,
                carried_basis=carried,
                date=date,
                acquired=lot.acquired,
            ))
        return exchanges
