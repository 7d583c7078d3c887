import unittest

from networth import tax, tax_rules


class TestMarginalTax(unittest.TestCase):

    def test_should_tax_first_bracket_only(self):
        # Under test
        result = tax.calculate_marginal_tax(100000, tax_rules.NON_EMPLOYMENT_TAX_BRACKETS)

        # Postcondition: 100k * 31%
        self.assertAlmostEqual(result, 31000, places=2)

    def test_should_span_multiple_brackets(self):
        # 269,280 at 31% = 83,476.8
        # 130,720 at 35% = 45,752
        result = tax.calculate_marginal_tax(400000, tax_rules.NON_EMPLOYMENT_TAX_BRACKETS)
        self.assertAlmostEqual(result, 129228.8, places=2)

    def test_should_stack_on_existing_income(self):
        # Precondition: 200k already earned, so the first 69,280 of the new amount is at 31%
        # and the remaining 30,720 at 35%.
        result = tax.calculate_marginal_tax(100000, tax_rules.NON_EMPLOYMENT_TAX_BRACKETS, existing_income=200000)
        self.assertAlmostEqual(result, 32228.8, places=2)

    def test_should_calculate_employment_tax(self):
        # 84,120 @10% + 36,600 @14% + 73,080 @20% + 6,200 @31%
        result = tax.calculate_marginal_tax(200000, tax_rules.EMPLOYMENT_TAX_BRACKETS)
        self.assertAlmostEqual(result, 30074, places=2)

    def test_should_return_zero_for_non_positive_amounts(self):
        self.assertEqual(tax.calculate_marginal_tax(0, tax_rules.NON_EMPLOYMENT_TAX_BRACKETS), 0)
        self.assertEqual(tax.calculate_marginal_tax(-1000, tax_rules.NON_EMPLOYMENT_TAX_BRACKETS), 0)

    def test_should_be_monotonic_for_every_table(self):
        tables = [
            tax_rules.EMPLOYMENT_TAX_BRACKETS,
            tax_rules.NON_EMPLOYMENT_TAX_BRACKETS,
            tax_rules.CAPITAL_GAINS_TAX_BRACKETS,
        ]
        amounts = [0, 1000, 84120, 100000, 269280, 500000, 721560, 1000000, 5000000, 12000000]

        for brackets in tables:
            top_rate = brackets[-1][1]
            taxes = [tax.calculate_marginal_tax(a, brackets) for a in amounts]
            rates = [tax.calculate_effective_tax_rate(a, brackets) for a in amounts]

            for lower, higher in zip(taxes, taxes[1:]):
                self.assertLessEqual(lower, higher)
            for lower, higher in zip(rates[1:], rates[2:]):
                self.assertLessEqual(lower, higher + 1e-12)
            for rate in rates:
                self.assertLessEqual(rate, top_rate)

    def test_should_calculate_blended_effective_rate(self):
        rate = tax.calculate_effective_tax_rate(400000, tax_rules.NON_EMPLOYMENT_TAX_BRACKETS)
        self.assertAlmostEqual(rate, 0.323, places=2)


class TestCapitalGains(unittest.TestCase):

    def test_should_apply_flat_25_percent_below_surtax(self):
        self.assertEqual(tax.calculate_net_equity(100000), 75000)

    def test_should_return_zero_for_missing_or_non_positive_profit(self):
        self.assertEqual(tax.calculate_net_equity(0), 0)
        self.assertEqual(tax.calculate_net_equity(-500), 0)
        self.assertEqual(tax.calculate_net_equity(None), 0)
        self.assertEqual(tax.calculate_net_equity(float("nan")), 0)

    def test_should_apply_surtax_bracket_above_threshold(self):
        # 721,560 @25% + 278,440 @28% = 258,353.2
        self.assertEqual(tax.calculate_net_equity(1000000), 741647)

    def test_should_apply_all_three_brackets_for_large_profit(self):
        profit = 10000000
        expected_tax = (tax_rules.SURTAX_THRESHOLD * 0.25
                        + (5000000 - tax_rules.SURTAX_THRESHOLD) * 0.28
                        + (profit - 5000000) * 0.30)
        self.assertEqual(tax.calculate_net_equity(profit), tax.round_half_up(profit - expected_tax))

    def test_should_increase_effective_rate_with_profit(self):
        small = tax.calculate_capital_gains_effective_rate(500000)
        medium = tax.calculate_capital_gains_effective_rate(2000000)
        large = tax.calculate_capital_gains_effective_rate(10000000)

        self.assertAlmostEqual(small, 0.25)
        self.assertGreater(medium, small)
        self.assertGreater(large, medium)
        self.assertLess(large, 0.30)

    def test_should_add_surtax_to_investment_withdrawal_above_threshold(self):
        self.assertAlmostEqual(tax.calculate_investment_withdrawal_tax(100000, 500000), 25000)
        self.assertAlmostEqual(tax.calculate_investment_withdrawal_tax(100000, 800000), 28000)
        self.assertEqual(tax.calculate_investment_withdrawal_tax(0, 500000), 0)
        self.assertEqual(tax.calculate_investment_withdrawal_tax(-1000, 500000), 0)


class TestPensionTax(unittest.TestCase):

    def test_should_tax_small_early_withdrawal_at_31_percent(self):
        result = tax.calculate_early_pension_withdrawal(100000)

        self.assertAlmostEqual(result.tax_paid, 31000, places=2)
        self.assertAlmostEqual(result.net_amount, 69000, places=2)
        self.assertAlmostEqual(result.effective_rate, tax_rules.EARLY_PENSION_PENALTY_TAX)

    def test_should_return_zeros_for_non_positive_withdrawal(self):
        result = tax.calculate_early_pension_withdrawal(0)
        self.assertEqual((result.net_amount, result.tax_paid, result.effective_rate), (0, 0, 0))

    def test_should_find_gross_for_net_in_first_bracket(self):
        gross = tax.gross_for_desired_net(69000)
        self.assertAlmostEqual(gross, 100000, delta=5)

    def test_should_round_trip_gross_and_net_in_each_bracket(self):
        for gross in [50000, 400000, 650000, 1500000]:
            net = tax.calculate_early_pension_withdrawal(gross).net_amount

            # Under test
            recovered = tax.gross_for_desired_net(net)

            # Postcondition
            self.assertAlmostEqual(recovered, gross, delta=5, msg=f"gross={gross}")
            self.assertAlmostEqual(tax.calculate_early_pension_withdrawal(recovered).net_amount, net, delta=1)

    def test_should_respect_existing_income_when_grossing_up(self):
        alone = tax.gross_for_desired_net(100000)
        stacked = tax.gross_for_desired_net(100000, existing_annual_income=700000)
        self.assertGreater(stacked, alone)

    def test_should_return_zero_gross_for_non_positive_net(self):
        self.assertEqual(tax.gross_for_desired_net(0), 0)
        self.assertEqual(tax.gross_for_desired_net(-1000), 0)

    def test_should_convert_pension_to_annuity_with_coefficient(self):
        annuity = tax.calculate_pension_annuity(2100000)

        self.assertEqual(annuity, 10000)
        self.assertAlmostEqual(tax.calculate_pension_annuity_tax(annuity), 1500)
        self.assertEqual(tax.calculate_pension_annuity(0), 0)
        self.assertEqual(tax.calculate_pension_annuity(-500000), 0)
        self.assertEqual(tax.calculate_pension_annuity_tax(-1000), 0)

    def test_should_face_higher_rates_for_larger_early_withdrawals(self):
        small = tax.calculate_early_pension_withdrawal(200000)
        medium = tax.calculate_early_pension_withdrawal(600000)
        large = tax.calculate_early_pension_withdrawal(2000000)

        self.assertAlmostEqual(small.effective_rate, 0.31, places=2)
        self.assertGreater(medium.effective_rate, small.effective_rate)
        self.assertGreater(large.effective_rate, medium.effective_rate)
        self.assertLessEqual(large.effective_rate, 0.52)


class TestRounding(unittest.TestCase):

    def test_should_round_halves_up(self):
        self.assertEqual(tax.round_half_up(2.5), 3)
        self.assertEqual(tax.round_half_up(3.5), 4)
        self.assertEqual(tax.round_half_up(2.49), 2)
        self.assertEqual(tax.round_half_up(-0.4), 0)


if __name__ == '__main__':
    unittest.main()
