import unittest
from datetime import date

import pandas as pd

from filters import course_names, course_suggestions, filter_matches, group_by_month


class LogbookFilterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.today = date(2025, 6, 15)
        self.matches = pd.DataFrame(
            [
                (1, "2025-06-10", "Fancourt Montagu", "Win"),
                (2, "2025-05-20", "Pinnacle Point", "Half"),
                (3, "2025-05-01", "Fancourt Montagu", "Loss"),
                (4, "2024-11-03", "Pinnacle Point", "Win"),
                (5, "2023-08-08", None, "Win"),
            ],
            columns=["id", "date", "course_name", "result"],
        )
        self.matches["date"] = pd.to_datetime(self.matches["date"])

    def ids(self, frame):
        return frame["id"].tolist()

    def test_period_filters(self) -> None:
        self.assertEqual(self.ids(filter_matches(self.matches, today=self.today)), [1, 2, 3, 4, 5])
        self.assertEqual(self.ids(filter_matches(self.matches, period="Last 30 Days", today=self.today)), [1, 2])
        self.assertEqual(self.ids(filter_matches(self.matches, period="This Year", today=self.today)), [1, 2, 3])
        self.assertEqual(self.ids(filter_matches(self.matches, period="Last Year", today=self.today)), [4])

    def test_last_30_days_excludes_day_thirty(self) -> None:
        edge = pd.DataFrame({
            "id": [10, 11],
            "date": pd.to_datetime(["2025-05-17", "2025-05-16"]),
            "course_name": ["A", "A"],
            "result": ["Win", "Win"],
        })
        recent = filter_matches(edge, period="Last 30 Days", today=self.today)
        self.assertEqual(self.ids(recent), [10])

    def test_result_and_course_filters_combine(self) -> None:
        wins = filter_matches(self.matches, result="Win", today=self.today)
        self.assertEqual(self.ids(wins), [1, 4, 5])
        fancourt_wins = filter_matches(self.matches, result="Win", course="Fancourt Montagu", today=self.today)
        self.assertEqual(self.ids(fancourt_wins), [1])
        none = filter_matches(self.matches, period="Last Year", course="Fancourt Montagu", today=self.today)
        self.assertTrue(none.empty)

    def test_unknown_period_rejected(self) -> None:
        with self.assertRaises(ValueError):
            filter_matches(self.matches, period="Last Week", today=self.today)

    def test_course_names_sorted_without_blanks(self) -> None:
        self.assertEqual(course_names(self.matches), ["Fancourt Montagu", "Pinnacle Point"])

    def test_group_by_month_keeps_order(self) -> None:
        groups = group_by_month(self.matches)
        self.assertEqual([title for title, _ in groups], ["June 2025", "May 2025", "November 2024", "August 2023"])
        self.assertEqual(self.ids(groups[1][1]), [2, 3])
        self.assertEqual(group_by_month(self.matches.iloc[0:0]), [])

    def test_course_suggestions(self) -> None:
        courses = pd.DataFrame(
            {"id": [1, 2, 3], "name": ["Fancourt Montagu", "Fancourt Links", "Pinnacle Point"]}
        )
        self.assertTrue(course_suggestions(courses, "f").empty)
        self.assertTrue(course_suggestions(courses, "").empty)
        self.assertEqual(course_suggestions(courses, "fan")["id"].tolist(), [1, 2])
        self.assertEqual(course_suggestions(courses, "LINKS")["name"].tolist(), ["Fancourt Links"])


if __name__ == "__main__":
    unittest.main()
