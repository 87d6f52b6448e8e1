"""
Record types shared by the classifier, the lot ledger and the reporting layer.

Amounts are Decimals throughout. Transactions are frozen: the only derived
record the engine ever builds is a copy (see Transaction.derive).
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Optional

from cost_basis.decimal_utils import to_decimal, EMPTY_AMOUNT
from cost_basis.utils.constants import TRADE_DATE_FORMAT


def day_of(trade_date: str) -> str:
    """Date portion of a 'dd.mm.yyyy HH:MM' timestamp"""
    return trade_date.strip().split(' ')[0]


def parse_day(trade_date: str) -> date:
    return datetime.strptime(day_of(trade_date), TRADE_DATE_FORMAT).date()


@dataclass(frozen=True)
class Transaction:
    type: str
    buy: Decimal = Decimal(0)
    cur_buy: str = ''
    sell: Decimal = Decimal(0)
    cur_sell: str = ''
    fee: Decimal = Decimal(0)
    cur_fee: str = ''
    exchange: str = ''
    trade_group: str = ''
    comment: str = ''
    trade_date: str = ''
    price: Optional[Decimal] = None  # only set on derived cost-basis records

    @classmethod
    def from_row(cls, row: Dict[str, str]) -> 'Transaction':
        """Build a transaction from a CSV row keyed by the fixed header names"""
        def text(key):
            value = row.get(key)
            return '' if value is None else str(value).strip()

        price = text('Price')
        return cls(
            type=text('Type'),
            buy=to_decimal(row.get('Buy')),
            cur_buy=text('CurBuy'),
            sell=to_decimal(row.get('Sell')),
            cur_sell=text('CurSell'),
            fee=to_decimal(row.get('Fee')),
            cur_fee=text('CurFee'),
            exchange=text('Exchange'),
            trade_group=text('Trade Group'),
            comment=text('Comment'),
            trade_date=text('Trade Date'),
            price=to_decimal(price) if price else None,
        )

    def to_row(self) -> Dict[str, str]:
        def amount(value, currency):
            return str(value) if currency or value else EMPTY_AMOUNT

        row = {
            'Type': self.type,
            'Buy': amount(self.buy, self.cur_buy),
            'CurBuy': self.cur_buy,
            'Sell': amount(self.sell, self.cur_sell),
            'CurSell': self.cur_sell,
            'Fee': amount(self.fee, self.cur_fee),
            'CurFee': self.cur_fee,
            'Exchange': self.exchange,
            'Trade Group': self.trade_group,
            'Comment': self.comment,
            'Trade Date': self.trade_date,
        }
        if self.price is not None:
            row['Price'] = str(self.price)
        return row

    def derive(self, **changes) -> 'Transaction':
        return replace(self, **changes)

    @property
    def day(self) -> str:
        return day_of(self.trade_date)

    @property
    def iso_day(self) -> str:
        """Day as YYYY-MM-DD, the form the price service expects"""
        return parse_day(self.trade_date).isoformat()

    @property
    def year(self) -> int:
        return parse_day(self.trade_date).year

    def describe(self) -> str:
        parts = [self.type]
        if self.buy or self.cur_buy:
            parts.append(f"+{self.buy} {self.cur_buy}")
        if self.sell or self.cur_sell:
            parts.append(f"-{self.sell} {self.cur_sell}")
        if self.exchange:
            parts.append(f"@ {self.exchange}")
        parts.append(f"on {self.trade_date}")
        return ' '.join(parts)


@dataclass
class Lot:
    """
    A quantity of an asset acquired at a USD unit cost on a given date.
    - amount: how much is still available to dispose of
    - unit_cost: USD basis per unit, never changed by a partial consumption
    """
    asset: str
    amount: Decimal
    unit_cost: Decimal
    acquired: str

    @property
    def cost_basis(self) -> Decimal:
        return self.amount * self.unit_cost


@dataclass(frozen=True)
class SaleRecord:
    """A realized gain/loss produced by consuming one lot portion"""
    asset: str
    amount_sold: Decimal
    proceeds: Decimal
    cost: Decimal
    date: str
    acquired: str = ''

    @property
    def gain(self) -> Decimal:
        return self.proceeds - self.cost


@dataclass(frozen=True)
class LikeKindExchange:
    """A deferred (pre-2018) trade portion: basis carried into the acquired asset"""
    asset: str
    amount_sold: Decimal
    acquired_asset: str
    amount_acquired: Decimal
    carried_basis: Decimal
    date: str
    acquired: str = ''


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem recorded for manual review"""
    transaction: Transaction
    message: str
    kind: str = field(default='')
