"""
================================================================================
INGESTOR - CoinTracking CSV Import/Export
================================================================================

Reads a trade history export into Transaction records and writes records
back out in the same layout.

The export header carries three identical 'Cur.' columns (for the Buy, Sell
and Fee amounts). They are renamed positionally to CurBuy, CurSell and CurFee
before parsing, and restored when writing.

Author: robertbiv
Last Modified: December 2025
================================================================================
"""

import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from cost_basis.core.models import Transaction, day_of
from cost_basis.utils.constants import (
    CURRENCY_COLUMNS,
    CURRENCY_HEADER,
    EXPORT_FIELDS,
    TRADE_DATE_FORMAT,
)

logger = logging.getLogger("cost_basis")

REQUIRED_COLUMNS = ('Type', 'Trade Date')


class IngestError(ValueError):
    """The input file cannot be turned into transactions"""


def fix_header(text: str) -> str:
    """Replace the duplicate 'Cur.' header cells with CurBuy, CurSell, CurFee"""
    lines = text.split('\n')
    header = lines[0]
    for name in CURRENCY_COLUMNS:
        header = header.replace(CURRENCY_HEADER, name, 1)
    return '\n'.join([header] + lines[1:])


def restore_header(text: str) -> str:
    lines = text.split('\n')
    header = lines[0]
    for name in CURRENCY_COLUMNS:
        header = header.replace(name, CURRENCY_HEADER, 1)
    return '\n'.join([header] + lines[1:])


def parse_transactions(text: str, source: str = '<input>') -> List[Transaction]:
    """Parse export text into transactions, preserving file order"""
    try:
        df = pd.read_csv(io.StringIO(fix_header(text)), dtype=str,
                         keep_default_na=False, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise IngestError(f"No data in {source}") from e
    except pd.errors.ParserError as e:
        raise IngestError(f"Malformed CSV in {source}: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise IngestError(f"Missing required column(s) {', '.join(missing)} in {source}")

    txs = []
    for idx, row in enumerate(df.to_dict('records')):
        tx = Transaction.from_row(row)
        try:
            datetime.strptime(day_of(tx.trade_date), TRADE_DATE_FORMAT)
        except ValueError as e:
            raise IngestError(f"Row {idx + 1} of {source} has an invalid Trade Date {tx.trade_date!r}") from e
        txs.append(tx)
    logger.info(f"Read {len(txs)} transactions from {source}")
    return txs


def read_transactions(path, sample_size: Optional[int] = None) -> List[Transaction]:
    """Read an export file; `sample_size` keeps only the first N transactions"""
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8-sig')
    except OSError as e:
        raise IngestError(f"Cannot read {path}: {e}") from e
    txs = parse_transactions(text, source=path.name)
    if sample_size is not None:
        txs = txs[:sample_size]
    return txs


def to_csv(transactions: Iterable[Transaction], fields: Optional[List[str]] = None) -> str:
    """Serialize transactions in the export layout with the 'Cur.' header restored"""
    fields = list(fields or EXPORT_FIELDS)
    rows = [tx.to_row() for tx in transactions]
    df = pd.DataFrame(rows, columns=fields).fillna('')
    return restore_header(df.to_csv(index=False))
