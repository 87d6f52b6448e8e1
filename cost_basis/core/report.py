"""
Summary and CSV export of a classification run.

The summary mirrors the category partition: bucket counts, a check that the
counts add up to the number of input transactions, the recoverable error
counts, and the aggregate realized gain.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Dict, List

import pandas as pd

from cost_basis.core.classifier import ClassificationResult
from cost_basis.decimal_utils import round_usd
from cost_basis.processors.ingestor import to_csv
from cost_basis.utils.constants import CATEGORIES, CATEGORY_LABELS, CATEGORY_UNMATCHED_DEPOSIT, EXPORT_FIELDS

logger = logging.getLogger("cost_basis")


@dataclass
class Summary:
    counts: Dict[str, int] = field(default_factory=dict)
    total: int = 0
    input_count: int = 0
    no_available_purchases: int = 0
    no_matching_withdrawals: int = 0
    price_errors: int = 0
    like_kind_exchanges: int = 0
    sales: int = 0
    total_gain: Decimal = Decimal(0)

    @property
    def balanced(self) -> bool:
        return self.total == self.input_count


def build_summary(result: ClassificationResult, input_count: int) -> Summary:
    counts = {c: len(result.bucket(c)) for c in CATEGORIES}
    return Summary(
        counts=counts,
        total=sum(counts.values()),
        input_count=input_count,
        no_available_purchases=len(result.no_available_purchases),
        no_matching_withdrawals=len(result.no_matching_withdrawals),
        price_errors=len(result.price_errors),
        like_kind_exchanges=len(result.like_kind_exchanges),
        sales=len(result.sales),
        total_gain=result.total_gain,
    )


def format_summary(summary: Summary) -> str:
    lines = ['']
    for category in CATEGORIES:
        lines.append(f"{CATEGORY_LABELS[category]}: {summary.counts.get(category, 0)}")
    if summary.balanced:
        lines.append(f"TOTAL: {summary.total} ✓")
    else:
        lines.append(f"✗ TOTAL: {summary.total}, TXS: {summary.input_count}")
    lines += [
        '',
        'ERRORS',
        f"No available purchase: {summary.no_available_purchases}",
        f"No matching withdrawals: {summary.no_matching_withdrawals}",
        f"Price errors: {summary.price_errors}",
        '',
        f"Like-Kind Exchanges: {summary.like_kind_exchanges}",
        f"Sales: {summary.sales}",
        f"Total Gains from Sales: {round_usd(summary.total_gain)}",
        '',
    ]
    return '\n'.join(lines)


def sales_frame(result: ClassificationResult) -> pd.DataFrame:
    rows = [{
        'Asset': s.asset,
        'Amount Sold': str(s.amount_sold),
        'Date Acquired': s.acquired,
        'Date Sold': s.date,
        'Proceeds': float(round_usd(s.proceeds)),
        'Cost Basis': float(round_usd(s.cost)),
        'Gain': float(round_usd(s.gain)),
    } for s in result.sales]
    return pd.DataFrame(rows, columns=['Asset', 'Amount Sold', 'Date Acquired', 'Date Sold',
                                       'Proceeds', 'Cost Basis', 'Gain'])


def export_results(result: ClassificationResult, output_dir: Path) -> List[Path]:
    """
    Write the realized sales and the synthesized cost-basis records for
    unmatched deposits. Returns the files written.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    sales_file = output_dir / 'SALES.csv'
    sales_frame(result).to_csv(sales_file, index=False)

    cost_basis_file = output_dir / 'UNMATCHED_DEPOSITS_COST_BASIS.csv'
    cost_basis_file.write_text(
        to_csv(result.bucket(CATEGORY_UNMATCHED_DEPOSIT), fields=EXPORT_FIELDS + ['Price']),
        encoding='utf-8')

    logger.info(f"Wrote {len(result.sales)} sale(s) to {sales_file}")
    return [sales_file, cost_basis_file]
