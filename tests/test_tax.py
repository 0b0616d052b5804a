import unittest

from firststage.exceptions import TaxRateInvalid
from firststage.swap import FixedInputQuote, FixedOutputQuote
from firststage.tax import apply_buy_tax, apply_sell_tax, get_max_group_size, get_reserved_txn_count, get_tax_amount, get_tax_base


class TaxTests(unittest.TestCase):

    def test_apply_sell_tax(self):
        self.assertEqual(apply_sell_tax(1_000_000, 500), 950_000)
        self.assertEqual(apply_sell_tax(1_000_000, 0), 1_000_000)
        self.assertEqual(apply_sell_tax(999, 300), 969)
        self.assertEqual(apply_sell_tax(1_000_000, 10_000), 0)

    def test_apply_sell_tax_invalid_rate(self):
        with self.assertRaises(TaxRateInvalid):
            apply_sell_tax(1_000_000, 10_001)

    def test_apply_buy_tax(self):
        self.assertEqual(apply_buy_tax(950_000, 500), 1_000_000)
        # Floor division
        self.assertEqual(apply_buy_tax(1_000, 300), 1_030)

    def test_buy_tax_recovers_sell_tax(self):
        for amount in [1, 7, 1_000, 1_000_000, 123_456_789]:
            for total_tax_bps in [1, 300, 500, 9_999]:
                recovered = apply_buy_tax(apply_sell_tax(amount, total_tax_bps), total_tax_bps)
                self.assertLessEqual(recovered, amount)
                self.assertLessEqual(amount - recovered, 10_000 // (10_000 - total_tax_bps) + 1)

    def test_apply_buy_tax_invalid_rate(self):
        with self.assertRaises(TaxRateInvalid):
            apply_buy_tax(950_000, 10_000)
        with self.assertRaises(TaxRateInvalid):
            apply_buy_tax(950_000, 12_000)

    def test_get_tax_base(self):
        self.assertEqual(get_tax_base(FixedInputQuote(amount=1_000_000), 300), 1_000_000)
        self.assertEqual(get_tax_base(FixedOutputQuote(amount=5, quote=970_000), 300), 1_000_000)

        with self.assertRaises(TaxRateInvalid):
            get_tax_base(FixedOutputQuote(amount=5, quote=970_000), 10_000)
        with self.assertRaises(TypeError):
            get_tax_base({"amount": 1}, 300)

    def test_get_tax_amount(self):
        self.assertEqual(get_tax_amount(1_000_000, 300), 30_000)
        self.assertEqual(get_tax_amount(999, 300), 29)
        self.assertEqual(get_tax_amount(1_000_000, 0), 0)

    def test_reserved_group_size(self):
        self.assertEqual(get_reserved_txn_count(0), 0)
        self.assertEqual(get_reserved_txn_count(2), 6)
        self.assertEqual(get_max_group_size(16, 3), 13)
        self.assertEqual(get_max_group_size(4, 6), 1)
