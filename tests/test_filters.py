import unittest
import os
import random
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.filters import ALL_SECTORS, DashboardFilters, normalize_filters, pick_initial_year


class TestPickInitialYear(unittest.TestCase):

    def test_no_years(self):
        self.assertIsNone(pick_initial_year([]))

    def test_seeded_choice_is_deterministic(self):
        years = ["2017", "2016", "2018"]
        picks = {pick_initial_year(years, rng=random.Random(42)) for _ in range(5)}
        self.assertEqual(len(picks), 1)
        self.assertIn(picks.pop(), years)

    def test_injected_source(self):
        class First:
            def choice(self, seq):
                return seq[0]

        self.assertEqual(pick_initial_year(["2018", "2016"], rng=First()), "2018")


class TestNormalizeFilters(unittest.TestCase):

    def test_defaults(self):
        f = normalize_filters({})
        self.assertEqual(f, DashboardFilters())
        self.assertEqual(f.selected_sector, ALL_SECTORS)

    def test_explicit_year_wins(self):
        f = normalize_filters({"selected_year": 2016}, available_years=["2017", "2016"], rng=random.Random(1))
        self.assertEqual(f.selected_year, "2016")

    def test_float_year(self):
        self.assertEqual(normalize_filters({"selected_year": "2016.0"}).selected_year, "2016")

    def test_missing_year_is_seeded(self):
        f = normalize_filters({"selected_year": "  "}, available_years=["2017"])
        self.assertEqual(f.selected_year, "2017")

    def test_sector_and_limit(self):
        f = normalize_filters({"selected_sector": " Energy ", "recent_limit": "500"})
        self.assertEqual(f.selected_sector, "Energy")
        self.assertEqual(f.recent_limit, 50)
        self.assertEqual(normalize_filters({"recent_limit": "x"}).recent_limit, 5)
        self.assertEqual(normalize_filters({"selected_sector": None}).selected_sector, ALL_SECTORS)


if __name__ == '__main__':
    unittest.main()
