import unittest

from networth.analytics import phase_breakdown, summarize_trace, trace_to_frame
from networth.household import PropertyConfig
from networth.simulation import run_simulation
from tests.fixtures import flat_params, make_params


class TestTraceViews(unittest.TestCase):

    def test_should_convert_trace_to_frame(self):
        # Precondition
        trace = run_simulation(30000, make_params())

        # Under test
        df = trace_to_frame(trace)

        # Postcondition
        self.assertEqual(len(df), len(trace))
        self.assertEqual(df.index.name, "index")
        self.assertEqual(df.index[-1], 672)
        self.assertIn("liquid_wealth", df.columns)
        self.assertEqual(df["liquid_wealth"].iloc[0], trace[0].liquid_wealth)

    def test_should_return_empty_views_for_empty_trace(self):
        self.assertTrue(trace_to_frame([]).empty)
        self.assertEqual(summarize_trace([]), {})
        self.assertTrue(phase_breakdown([]).empty)

    def test_should_summarize_annuity_household(self):
        # Precondition: 2.1M pension annuitised at 60, spending below the annuity
        params = flat_params(initial_age=60, end_of_life_age=62,
                             investment_initial_value=100000, pension_initial_value=2100000)

        # Under test
        summary = summarize_trace(run_simulation(5000, params))

        # Postcondition: 3,500 surplus reinvested each of 25 months
        self.assertEqual(summary["annuity_start_age"], 60.0)
        self.assertIsNone(summary["first_depleted_age"])
        self.assertEqual(summary["final_liquid_wealth"], 100000 + 25 * 3500)
        self.assertEqual(summary["peak_liquid_wealth"], summary["final_liquid_wealth"])
        self.assertEqual(summary["events"], ["1/2026: Pension annuity conversion"])

    def test_should_list_only_months_with_events(self):
        # Precondition: property bought in 2030, pension annuitised at 60
        params = make_params(stop_work_year=31,
                             property_config=PropertyConfig(price=1000000, year=2030, monthly_savings=5000))
        trace = run_simulation(30000, params)

        events = summarize_trace(trace)["events"]

        self.assertEqual(events, ["1/2030: Property purchase", "1/2057: Pension annuity conversion"])
        self.assertTrue(all("nan" not in e for e in events))

    def test_should_report_first_depleted_age(self):
        params = flat_params(initial_age=60, end_of_life_age=62, investment_initial_value=50000)

        summary = summarize_trace(run_simulation(10000, params))

        # 50k lasts five months: balance hits zero at month 4 (age 60.3)
        self.assertEqual(summary["first_depleted_age"], 60.3)
        self.assertIsNone(summary["annuity_start_age"])
        self.assertEqual(summary["final_total_legacy"], 0)

    def test_should_group_snapshots_by_phase(self):
        trace = run_simulation(30000, make_params(stop_work_year=31))

        df = phase_breakdown(trace)

        self.assertEqual(list(df.index[:2]), ["Full salary", "Half-time work"])
        self.assertEqual(df.loc["Full salary", "start_age"], 34.0)
        self.assertEqual(df.loc["Half-time work", "start_age"], 39.0)
        self.assertEqual(df["snapshots"].sum(), len(trace))


if __name__ == '__main__':
    unittest.main()
