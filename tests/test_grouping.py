"""Day grouping tests"""
from test_common import *

from cost_basis.core.grouping import group_by_day


class TestGroupByDay(unittest.TestCase):
    def test_groups_by_date_portion(self):
        a = tx('Deposit', buy='1', cur_buy='BTC', date='01.02.2018 09:00')
        b = tx('Withdrawal', sell='1', cur_sell='BTC', date='01.02.2018 23:59')
        c = tx('Deposit', buy='1', cur_buy='ETH', date='02.02.2018 00:00')
        groups = group_by_day([a, b, c])
        self.assertEqual(list(groups), ['01.02.2018', '02.02.2018'])
        self.assertEqual(groups['01.02.2018'], [a, b])
        self.assertEqual(groups['02.02.2018'], [c])

    def test_preserves_relative_order_and_first_seen_days(self):
        a = tx('Spend', sell='1', cur_sell='BTC', date='05.02.2018 10:00')
        b = tx('Lost', sell='1', cur_sell='BTC', date='03.02.2018 10:00')
        c = tx('Spend', sell='2', cur_sell='BTC', date='05.02.2018 08:00')
        groups = group_by_day([a, b, c])
        self.assertEqual(list(groups), ['05.02.2018', '03.02.2018'])
        self.assertEqual(groups['05.02.2018'], [a, c])

    def test_empty(self):
        self.assertEqual(group_by_day([]), {})

    def test_every_transaction_lands_once(self):
        txs = [tx('Spend', sell=str(i), cur_sell='BTC', date=f'{1 + i % 3:02d}.02.2018 10:00')
               for i in range(10)]
        groups = group_by_day(txs)
        self.assertEqual(sum(len(g) for g in groups.values()), len(txs))


if __name__ == '__main__':
    unittest.main()
