import unittest
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pandas as pd

from core.aggregate import (
    distinct_sectors,
    distinct_years,
    filter_by_sector,
    filter_by_year,
    group_average_by_sector,
    mean,
    overall_average,
    recent_records,
    region_distribution,
    round_half_up,
    yearly_average,
)
from core.data import normalize_records
from sample_data import SAMPLE_DOCS


class TestMean(unittest.TestCase):

    def test_mean_of_values(self):
        self.assertEqual(mean([10, 20]), 15.0)

    def test_empty_group_policy(self):
        self.assertEqual(mean([]), 0.0)
        self.assertEqual(mean([], empty=-1.0), -1.0)

    def test_ignores_non_numeric(self):
        self.assertEqual(mean([4, None, "x", 8]), 6.0)

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.345, 2), 2.35)
        self.assertEqual(round_half_up(1.0 / 3, 2), 0.33)
        self.assertIsNone(round_half_up(None, 2))


class TestYearsAndFilters(unittest.TestCase):

    def setUp(self):
        self.records = normalize_records(SAMPLE_DOCS)

    def test_distinct_years_first_appearance(self):
        self.assertEqual(distinct_years(self.records), ["2017", "2016", "2018"])

    def test_distinct_years_unique_and_present(self):
        years = distinct_years(self.records)
        self.assertEqual(len(years), len(set(years)))
        for year in years:
            self.assertTrue(any(str(doc["published"]).startswith(year) for doc in SAMPLE_DOCS))

    def test_distinct_years_empty(self):
        self.assertEqual(distinct_years(normalize_records([])), [])

    def test_filter_by_year_subset_in_order(self):
        subset = filter_by_year(self.records, "2017")
        self.assertEqual(subset["title"].tolist(), ["Oil prices expected to rise", "Banks tighten lending"])
        self.assertTrue(set(subset.index).issubset(set(self.records.index)))
        self.assertTrue((subset["published_year"] == "2017").all())
        self.assertEqual(list(subset.index), sorted(subset.index))

    def test_filter_by_year_accepts_int(self):
        self.assertEqual(len(filter_by_year(self.records, 2016)), 1)

    def test_filter_by_year_unset_returns_all(self):
        self.assertEqual(len(filter_by_year(self.records, None)), len(self.records))
        self.assertEqual(len(filter_by_year(self.records, "")), len(self.records))

    def test_filter_by_unknown_year(self):
        self.assertTrue(filter_by_year(self.records, "1999").empty)

    def test_sectors(self):
        self.assertEqual(distinct_sectors(self.records), ["Energy", "Financial services", "Manufacturing"])
        self.assertEqual(len(filter_by_sector(self.records, "Energy")), 3)
        self.assertEqual(len(filter_by_sector(self.records, "All")), 5)
        self.assertEqual(len(filter_by_sector(self.records, None)), 5)


class TestAverages(unittest.TestCase):

    def setUp(self):
        self.records = normalize_records(SAMPLE_DOCS)

    def test_overall_average_empty(self):
        self.assertEqual(overall_average(normalize_records([]), "intensity"), 0)

    def test_overall_average_two_records(self):
        records = normalize_records([{"intensity": 10}, {"intensity": 20}])
        self.assertEqual(overall_average(records, "intensity"), 15)

    def test_overall_average_unknown_field(self):
        self.assertEqual(overall_average(self.records, "impact"), 0)

    def test_group_average_missing_likelihood(self):
        records = normalize_records([
            {"sector": "A", "intensity": 10, "relevance": 20},
            {"sector": "A", "intensity": 30, "relevance": 40, "likelihood": 10},
        ])
        self.assertEqual(
            group_average_by_sector(records),
            [{"sector": "A", "intensity": 20.0, "likelihood": 5.0, "relevance": 30.0}],
        )

    def test_group_average_by_sector(self):
        rows = group_average_by_sector(self.records)
        self.assertEqual([r["sector"] for r in rows], ["Energy", "Financial services", "Manufacturing"])
        energy = rows[0]
        self.assertEqual(energy["intensity"], 6.0)
        self.assertEqual(energy["likelihood"], 1.33)
        self.assertEqual(energy["relevance"], 2.33)

    def test_group_average_never_invents_sectors(self):
        subset = filter_by_sector(self.records, "Manufacturing")
        rows = group_average_by_sector(subset)
        self.assertEqual([r["sector"] for r in rows], ["Manufacturing"])
        self.assertEqual(group_average_by_sector(normalize_records([])), [])

    def test_yearly_average(self):
        self.assertEqual(yearly_average(self.records, "intensity"), {"2017": 5.0, "2016": 10.0, "2018": 8.0})
        self.assertEqual(yearly_average(self.records, "relevance"), {"2017": 2.0, "2016": 4.0, "2018": 3.0})

    def test_yearly_average_empty(self):
        self.assertEqual(yearly_average(normalize_records([]), "intensity"), {})


class TestDistribution(unittest.TestCase):

    def setUp(self):
        self.records = normalize_records(SAMPLE_DOCS)

    def test_region_distribution(self):
        self.assertEqual(
            region_distribution(self.records),
            [
                {"region": "Northern America", "count": 1},
                {"region": "World", "count": 2},
                {"region": "Europe", "count": 2},
            ],
        )

    def test_region_counts_sum_to_length(self):
        total = sum(r["count"] for r in region_distribution(self.records))
        self.assertEqual(total, len(self.records))

    def test_recent_records(self):
        recent = recent_records(self.records, limit=2)
        self.assertEqual(recent, [
            {"title": "Oil prices expected to rise", "added": "January, 20 2017 03:51:25"},
            {"title": "Solar capacity keeps growing", "added": "January, 21 2017 10:00:00"},
        ])
        self.assertEqual(recent_records(normalize_records([])), [])


class TestPurity(unittest.TestCase):

    def test_functions_are_idempotent_and_do_not_mutate(self):
        records = normalize_records(SAMPLE_DOCS)
        before = records.copy()
        for fn in (distinct_years, group_average_by_sector, region_distribution):
            self.assertEqual(fn(records), fn(records))
        self.assertEqual(yearly_average(records, "intensity"), yearly_average(records, "intensity"))
        self.assertEqual(overall_average(records, "relevance"), overall_average(records, "relevance"))
        pd.testing.assert_frame_equal(filter_by_year(records, "2017"), filter_by_year(records, "2017"))
        pd.testing.assert_frame_equal(records, before)


if __name__ == '__main__':
    unittest.main()
