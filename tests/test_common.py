"""
================================================================================
TEST COMMON - Shared Test Infrastructure
================================================================================

Provides common imports, builders and fakes for all test suites.

Exported Utilities:
    tx(...)            - Transaction builder with CoinTracking-style defaults
    FakePriceFetcher   - Deterministic price lookups keyed by (asset, day)
    SAMPLE_CSV         - A small export with the duplicate 'Cur.' header

Design Philosophy:
    - Real ledger and classifier calculations
    - Mock external APIs only (prices, HTTP)

Usage:
    from test_common import *

Author: robertbiv
Last Modified: December 2025
================================================================================
"""
import unittest
import json
import tempfile
from pathlib import Path
from decimal import Decimal
from unittest.mock import patch, MagicMock

from cost_basis.core.models import Transaction
from cost_basis.processors.price_fetcher import PriceUnavailable, UpstreamError

D = Decimal


def tx(type, buy='-', cur_buy='', sell='-', cur_sell='', fee='', cur_fee='',
       exchange='', trade_group='', comment='', date='17.06.2018 12:00'):
    """Build a Transaction the way the ingestor would from one CSV row"""
    return Transaction.from_row({
        'Type': type, 'Buy': buy, 'CurBuy': cur_buy, 'Sell': sell, 'CurSell': cur_sell,
        'Fee': fee, 'CurFee': cur_fee, 'Exchange': exchange, 'Trade Group': trade_group,
        'Comment': comment, 'Trade Date': date,
    })


class FakePriceFetcher:
    """
    Stands in for PriceFetcher. Prices are keyed by (asset, YYYY-MM-DD day);
    keys listed in `missing` raise PriceUnavailable, keys in `broken` raise
    UpstreamError, anything else unknown falls back to `default`.
    """

    def __init__(self, prices=None, default=None, missing=(), broken=()):
        self.prices = {k: D(str(v)) for k, v in (prices or {}).items()}
        self.default = None if default is None else D(str(default))
        self.missing = set(missing)
        self.broken = set(broken)
        self.calls = []

    def get_price(self, from_asset, to_asset, day, venue=None):
        self.calls.append((from_asset, to_asset, day, venue))
        key = (from_asset, day)
        if key in self.missing:
            raise PriceUnavailable(f"No price for {from_asset} on {day}")
        if key in self.broken:
            raise UpstreamError(f"Upstream failure for {from_asset} on {day}")
        if key in self.prices:
            return self.prices[key]
        if self.default is not None:
            return self.default
        raise PriceUnavailable(f"No price for {from_asset} on {day}")


SAMPLE_CSV = '''"Type","Buy","Cur.","Sell","Cur.","Fee","Cur.","Exchange","Trade Group","Comment","Trade Date"
"Deposit","1.00000000","BTC","-","","-","","Kraken","","","02.01.2018 10:00"
"Withdrawal","-","","1.01000000","BTC","-","","Poloniex","","","02.01.2018 09:00"
"Deposit","100.00000000","USD","-","","-","","Kraken","","","03.01.2018 08:00"
"Trade","5000.00000000","USD","0.50000000","BTC","","","Kraken","","","05.02.2018 14:30"
"Income","0.10000000","ETH","-","","-","","Poloniex","Lending","","06.02.2018 00:00"
'''
