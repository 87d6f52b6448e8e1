"""Summary and export tests"""
from test_common import *

import pandas as pd

from cost_basis.core.classifier import calculate
from cost_basis.core.report import build_summary, export_results, format_summary, sales_frame
from cost_basis.processors.ingestor import parse_transactions
from cost_basis.utils import constants as C


class TestSummary(unittest.TestCase):
    def setUp(self):
        self.txs = parse_transactions(SAMPLE_CSV)
        self.result = calculate(self.txs, FakePriceFetcher(default=0))

    def test_sample_partition(self):
        summary = build_summary(self.result, len(self.txs))
        self.assertTrue(summary.balanced)
        self.assertEqual(summary.counts[C.CATEGORY_MATCHED_DEPOSIT], 1)
        self.assertEqual(summary.counts[C.CATEGORY_WITHDRAWAL], 1)
        self.assertEqual(summary.counts[C.CATEGORY_USD_DEPOSIT], 1)
        self.assertEqual(summary.counts[C.CATEGORY_USD_BUY], 1)
        self.assertEqual(summary.counts[C.CATEGORY_LENDING], 1)
        # The matched deposit brings no lots, so the sale has nothing to consume
        self.assertEqual(summary.no_available_purchases, 1)

    def test_format(self):
        text = format_summary(build_summary(self.result, len(self.txs)))
        self.assertIn('TOTAL: 5 ✓', text)
        self.assertIn('Matched Deposits: 1', text)
        self.assertIn('No available purchase: 1', text)
        self.assertIn('Total Gains from Sales: 0.00', text)

    def test_unbalanced_total_is_flagged(self):
        text = format_summary(build_summary(self.result, 6))
        self.assertIn('✗ TOTAL: 5, TXS: 6', text)

    def test_gain_rounded_to_cents(self):
        result = calculate([
            tx('Deposit', buy='1000', cur_buy='USD'),
            tx('Income', buy='1', cur_buy='BTC', date='16.06.2018 10:00'),
            tx('Trade', buy='1234.567', cur_buy='USD', sell='1', cur_sell='BTC'),
        ], FakePriceFetcher({('BTC', '2018-06-16'): 1000}))
        text = format_summary(build_summary(result, 3))
        self.assertIn('Total Gains from Sales: 234.57', text)
        self.assertIn('Sales: 1', text)


class TestExport(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.out = Path(self.tmp.name) / 'outputs'

    def tearDown(self):
        self.tmp.cleanup()

    def test_writes_sales_and_cost_basis_records(self):
        result = calculate([
            tx('Income', buy='1', cur_buy='BTC', date='16.06.2018 10:00'),
            tx('Trade', buy='2000', cur_buy='USD', sell='0.5', cur_sell='BTC'),
            tx('Deposit', buy='3', cur_buy='ETH', date='18.06.2018 10:00'),
        ], FakePriceFetcher({('BTC', '2018-06-16'): 1000, ('ETH', '2018-06-18'): 500}))

        sales_file, cost_basis_file = export_results(result, self.out)
        self.assertEqual(sales_file.name, 'SALES.csv')
        self.assertEqual(cost_basis_file.name, 'UNMATCHED_DEPOSITS_COST_BASIS.csv')

        sales = pd.read_csv(sales_file)
        self.assertEqual(len(sales), 1)
        self.assertEqual(sales.loc[0, 'Asset'], 'BTC')
        self.assertAlmostEqual(sales.loc[0, 'Gain'], 1500.0)

        lines = cost_basis_file.read_text(encoding='utf-8').strip().split('\n')
        self.assertIn('Cur.', lines[0])
        self.assertTrue(lines[0].endswith('Price'))
        self.assertEqual(len(lines), 2)
        self.assertIn('Cost Basis', lines[1])
        self.assertTrue(lines[1].endswith('500'))

    def test_empty_result(self):
        result = calculate([], FakePriceFetcher())
        self.assertTrue(sales_frame(result).empty)
        sales_file, _ = export_results(result, self.out)
        self.assertTrue(sales_file.exists())


if __name__ == '__main__':
    unittest.main()
